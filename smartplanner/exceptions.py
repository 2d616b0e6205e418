"""Custom exceptions for smartplanner."""


class SmartPlannerError(Exception):
    """Base exception for smartplanner."""

    pass


class RatingsFetchError(SmartPlannerError):
    """Raised when the rated-generations log cannot be read."""

    pass


class GenerationError(SmartPlannerError):
    """Raised when copy generation fails."""

    pass


class PromptCompositionError(SmartPlannerError):
    """Raised when a generation prompt cannot be assembled."""

    pass


class VoiceAnalysisError(SmartPlannerError):
    """Raised when brand voice analysis fails."""

    pass


class WorkflowError(SmartPlannerError):
    """Raised when workflow execution fails."""

    pass


class ValidationError(SmartPlannerError):
    """Raised when input validation fails."""

    pass
