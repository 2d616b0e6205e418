from datetime import date
from typing import Any, TypedDict


class CaptureState(TypedDict):
    """State that flows through the quick-capture workflow."""

    # Input fields
    input_text: str
    today: date | None
    recent_items: Any | None  # RecentItemsStore

    # Classification results
    suggested_type: str | None  # "task", "idea", "content", "income", "expense"
    confidence: str | None  # "high", "medium", "low"
    reason: str | None

    # Derived records
    parsed_task: dict[str, Any] | None
    task_payload: dict[str, Any] | None
    idea_content: str | None

    # Workflow control
    error: str | None


class GenerationState(TypedDict):
    """State that flows through the copy-generation workflow."""

    # Input fields
    user_id: str
    content_type: str
    brand_profile: Any | None  # BrandProfile
    product: Any | None  # Product
    copy_controls: Any | None  # CopyControls
    additional_context: str | None

    # Learning
    ratings_reader: Any | None  # RatingsLogReader
    past_feedback: list[Any] | None  # RatedGeneration, newest first
    feedback_pattern: Any | None  # FeedbackPattern
    adaptive_params: Any | None  # AdaptiveParams

    # Prompt
    system_prompt: str | None
    user_prompt: str | None

    # Generation results
    generated_copy: str | None
    tokens_used: int | None
    generation_time_ms: int | None

    # AI pattern check
    ai_score: int | None
    ai_warnings: list[str] | None
    ai_suggestions: list[str] | None
    ai_assessment: str | None

    # Workflow control
    error: str | None
