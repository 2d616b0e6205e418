import logging
from datetime import date
from typing import Any, cast

from langgraph.graph import StateGraph
from langgraph.graph.state import CompiledStateGraph

from ..models.brand import BrandProfile, CopyControls, Product
from ..processing.generation_store import RatingsLogReader
from ..processing.recent_items import RecentItemsStore
from ..utils.error_handling import check_state_for_errors
from .nodes.ai_detector import detect_ai_patterns
from .nodes.capture_classifier import classify_capture, clean_idea
from .nodes.copy_generator import generate_copy
from .nodes.feedback_loader import load_adaptive_params
from .nodes.mock_generator import mock_generate_copy
from .nodes.prompt_builder import compose_prompt
from .nodes.task_extractor import extract_task_fields
from .state import CaptureState, GenerationState

logger = logging.getLogger(__name__)


def route_after_classification(state: CaptureState) -> str:
    """Route based on the detected capture type."""
    if check_state_for_errors(cast(dict[str, Any], state)):
        return "end"

    suggested_type = state.get("suggested_type")
    logger.debug(f"Routing capture as {suggested_type} ({state.get('confidence')})")
    if suggested_type == "task":
        return "extract_task_fields"
    if suggested_type == "idea":
        return "clean_idea"
    return "end"


def get_capture_workflow() -> CompiledStateGraph[CaptureState, Any]:
    """Get or create the compiled quick-capture workflow.

    Returns:
        Compiled LangGraph workflow

    """
    workflow = StateGraph(CaptureState)

    workflow.add_node("classify", classify_capture)
    workflow.add_node("extract_task_fields", extract_task_fields)
    workflow.add_node("clean_idea", clean_idea)

    workflow.add_conditional_edges(
        "classify",
        route_after_classification,
        {
            "extract_task_fields": "extract_task_fields",
            "clean_idea": "clean_idea",
            "end": "__end__",
        },
    )

    workflow.set_entry_point("classify")
    workflow.set_finish_point("extract_task_fields")
    workflow.set_finish_point("clean_idea")

    return workflow.compile()


def get_generation_workflow(use_mock: bool = False) -> CompiledStateGraph[GenerationState, Any]:
    """Get or create the compiled copy-generation workflow.

    Args:
        use_mock: Use the deterministic mock generator instead of OpenAI

    Returns:
        Compiled LangGraph workflow

    """
    workflow = StateGraph(GenerationState)

    workflow.add_node("load_adaptive_params", load_adaptive_params)
    workflow.add_node("compose_prompt", compose_prompt)
    workflow.add_node("generate_copy", mock_generate_copy if use_mock else generate_copy)
    workflow.add_node("detect_ai_patterns", detect_ai_patterns)

    workflow.add_edge("load_adaptive_params", "compose_prompt")
    workflow.add_edge("compose_prompt", "generate_copy")
    workflow.add_edge("generate_copy", "detect_ai_patterns")

    workflow.set_entry_point("load_adaptive_params")
    workflow.set_finish_point("detect_ai_patterns")

    return workflow.compile()


def create_initial_capture_state(
    input_text: str,
    today: date | None = None,
    recent_items: RecentItemsStore | None = None,
) -> CaptureState:
    """Create initial state for capture processing.

    Args:
        input_text: Raw text the user typed or dictated
        today: Reference date for relative task dates
        recent_items: Store that remembers the tags and projects of parsed tasks

    Returns:
        Initial capture state

    """
    return {
        "input_text": input_text,
        "today": today,
        "recent_items": recent_items,
        "suggested_type": None,
        "confidence": None,
        "reason": None,
        "parsed_task": None,
        "task_payload": None,
        "idea_content": None,
        "error": None,
    }


def create_initial_generation_state(
    user_id: str,
    content_type: str,
    brand_profile: BrandProfile | None = None,
    product: Product | None = None,
    copy_controls: CopyControls | None = None,
    additional_context: str | None = None,
    ratings_reader: RatingsLogReader | None = None,
) -> GenerationState:
    """Create initial state for a generation request."""
    return {
        "user_id": user_id,
        "content_type": content_type,
        "brand_profile": brand_profile,
        "product": product,
        "copy_controls": copy_controls,
        "additional_context": additional_context,
        # Learning fields
        "ratings_reader": ratings_reader,
        "past_feedback": None,
        "feedback_pattern": None,
        "adaptive_params": None,
        # Prompt fields
        "system_prompt": None,
        "user_prompt": None,
        # Generation fields
        "generated_copy": None,
        "tokens_used": None,
        "generation_time_ms": None,
        "ai_score": None,
        "ai_warnings": None,
        "ai_suggestions": None,
        "ai_assessment": None,
        "error": None,
    }


def process_capture(
    input_text: str,
    today: date | None = None,
    recent_items: RecentItemsStore | None = None,
) -> CaptureState:
    """Classify a capture and derive its structured record.

    Args:
        input_text: Raw capture text
        today: Reference date for relative task dates
        recent_items: Store that remembers the tags and projects of parsed tasks

    Returns:
        Capture state after processing

    """
    app = get_capture_workflow()
    result = app.invoke(create_initial_capture_state(input_text, today, recent_items))
    return cast(CaptureState, result)


def process_generation(
    user_id: str,
    content_type: str,
    ratings_reader: RatingsLogReader | None = None,
    brand_profile: BrandProfile | None = None,
    product: Product | None = None,
    copy_controls: CopyControls | None = None,
    additional_context: str | None = None,
    use_mock: bool = False,
) -> GenerationState:
    """Generate copy for a content type, personalized by past ratings.

    Returns:
        Generation state after processing

    """
    app = get_generation_workflow(use_mock=use_mock)
    initial_state = create_initial_generation_state(
        user_id,
        content_type,
        brand_profile=brand_profile,
        product=product,
        copy_controls=copy_controls,
        additional_context=additional_context,
        ratings_reader=ratings_reader,
    )
    result = app.invoke(initial_state)
    return cast(GenerationState, result)
