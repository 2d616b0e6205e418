import logging

from ...models.brand import get_default_controls
from ...processing.prompt_composer import StrategyComposer
from ...utils.error_handling import create_error_response
from ..state import GenerationState

logger = logging.getLogger(__name__)


def compose_prompt(state: GenerationState) -> dict:
    """Build the system and user prompts for the requested content type."""
    if state.get("error"):
        return {}

    content_type = state["content_type"]
    controls = state.get("copy_controls") or get_default_controls(content_type)
    composer = StrategyComposer()

    try:
        system_prompt = composer.build_system_prompt(
            brand_profile=state.get("brand_profile"),
            adaptive_params=state.get("adaptive_params"),
            copy_controls=controls,
            past_feedback=state.get("past_feedback"),
            feedback_pattern=state.get("feedback_pattern"),
        )
        user_prompt = composer.build_user_prompt(
            content_type,
            product=state.get("product"),
            additional_context=state.get("additional_context"),
        )
    except Exception as e:
        logger.error(f"Prompt composition failed for {content_type}: {e}")
        return create_error_response(e, system_prompt=None, user_prompt=None)

    logger.debug(f"Composed {len(system_prompt)} char system prompt for {content_type}")
    return {
        "copy_controls": controls,
        "system_prompt": system_prompt,
        "user_prompt": user_prompt,
    }
