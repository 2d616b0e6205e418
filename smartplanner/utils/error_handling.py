"""Standardized error handling utilities for the smartplanner workflows."""

from typing import Any


def create_error_response(
    error: Exception | str,
    **defaults: Any,
) -> dict[str, Any]:
    """Create a standardized error response for LangGraph nodes.

    Args:
        error: The error that occurred
        **defaults: Safe values for state fields the failing node owns

    Returns:
        Dictionary with error information and safe defaults

    """
    error_message = str(error) if isinstance(error, Exception) else error

    response: dict[str, Any] = {"error": error_message}
    response.update(defaults)
    return response


def check_state_for_errors(state: dict[str, Any]) -> bool:
    """Check if a state contains errors.

    Args:
        state: The workflow state to check

    Returns:
        True if state contains errors, False otherwise

    """
    return bool(state.get("error"))
