import logging

from ...config import ADAPTIVE_CONFIG
from ...models.content_type import get_family_members
from ...models.feedback import AdaptiveParams
from ...processing.adaptive_learning import AdaptiveLearningEngine
from ..state import GenerationState

logger = logging.getLogger(__name__)


def load_adaptive_params(state: GenerationState) -> dict:
    """Learn generation adjustments from the user's rated history.

    A missing or failing ratings reader never fails the generation; the
    copy is then written with neutral parameters.
    """
    if state.get("error"):
        return {}

    reader = state.get("ratings_reader")
    if reader is None:
        logger.debug("No ratings reader in state, generating without personalization")
        return {
            "feedback_pattern": None,
            "adaptive_params": AdaptiveParams.neutral(),
            "past_feedback": [],
        }

    user_id = state["user_id"]
    content_type = state["content_type"]
    engine = AdaptiveLearningEngine(reader)

    pattern = engine.analyze_feedback_patterns(user_id, content_type)
    params = engine.generate_adaptive_params(pattern)

    try:
        past_feedback = reader.fetch_rated_generations(
            user_id,
            get_family_members(content_type),
            ADAPTIVE_CONFIG["recent_low_rated"],
        )
    except Exception as e:
        logger.warning(f"Could not load past feedback for {user_id}: {e!s}")
        past_feedback = []

    if params.is_neutral():
        logger.info(f"No adaptive adjustments for {content_type}")
    else:
        logger.info(
            f"Adaptive adjustments for {content_type}: "
            f"temperature {params.temperature_adjustment:+.2f}, "
            f"{len(params.strategic_guidance)} guidance lines"
        )

    return {
        "feedback_pattern": pattern,
        "adaptive_params": params,
        "past_feedback": list(past_feedback or []),
    }
