import logging
import re
from re import Pattern

from ...config import (
    ACTION_VERBS,
    CLASSIFIER_CONFIG,
    CURRENCY_PATTERN,
    EXPENSE_PHRASES,
    EXPLICIT_MARKERS,
    IDEA_PHRASES,
    INCOME_PHRASES,
    TIME_DATE_PATTERNS,
)
from ...models.capture import CaptureType, Confidence, DetectionResult
from ...utils.error_handling import create_error_response
from ..state import CaptureState

logger = logging.getLogger(__name__)


def _phrase_pattern(phrases: list[str]) -> Pattern:
    # Whole words plus plural and past-tense endings ("bills", "purchased")
    alternatives = "|".join(re.escape(phrase) for phrase in phrases)
    return re.compile(rf"\b(?:{alternatives})(?:s|es|ed|d|ing)?\b")


TAG_TOKEN_PATTERN = re.compile(r"#\w+")
INCOME_PATTERN = _phrase_pattern(INCOME_PHRASES)
EXPENSE_PATTERN = _phrase_pattern(EXPENSE_PHRASES)
IDEA_PATTERN = _phrase_pattern(IDEA_PHRASES)


def _contains_any(text: str, pattern: Pattern) -> bool:
    return pattern.search(text) is not None


def _starts_with_action_verb(text: str) -> bool:
    words = text.split()
    if not words:
        return False
    first_word = words[0]
    return any(
        first_word in (verb, verb + "s", verb + "ing") for verb in ACTION_VERBS
    )


def classify(
    input_text: str, ambiguous_currency_type: str | None = None
) -> DetectionResult:
    """Suggest a capture type for raw input text.

    Rules are checked in a fixed order and the first match wins:
    explicit markers, currency at the start, income phrases, expense
    phrases, idea phrases, time/date patterns, a leading action verb.
    Anything else is a low-confidence task.

    Args:
        input_text: Raw text typed or dictated by the user
        ambiguous_currency_type: Type to use when input starts with an
            amount but has no income/expense context. Defaults to
            ``CLASSIFIER_CONFIG["ambiguous_currency_type"]``.

    Returns:
        DetectionResult with suggested type, confidence and reason

    """
    trimmed = input_text.strip().lower()

    for markers, capture_type in EXPLICIT_MARKERS:
        if trimmed.startswith(markers):
            return DetectionResult(
                CaptureType(capture_type),
                Confidence.HIGH,
                f"Explicit {capture_type} marker",
            )

    # "#sales" is a tag, not the phrase "sale"
    untagged = TAG_TOKEN_PATTERN.sub(" ", trimmed)
    has_income_phrase = _contains_any(untagged, INCOME_PATTERN)
    has_expense_phrase = _contains_any(untagged, EXPENSE_PATTERN)

    if CURRENCY_PATTERN.match(trimmed):
        if has_income_phrase:
            return DetectionResult(
                CaptureType.INCOME, Confidence.HIGH, "Currency with income context"
            )
        if has_expense_phrase:
            return DetectionResult(
                CaptureType.EXPENSE, Confidence.HIGH, "Currency with expense context"
            )
        fallback = ambiguous_currency_type or CLASSIFIER_CONFIG["ambiguous_currency_type"]
        fallback_type = CaptureType.from_string(fallback)
        if fallback_type is None:
            logger.warning(f"Unknown ambiguous currency type '{fallback}', using expense")
            fallback_type = CaptureType.EXPENSE
        return DetectionResult(fallback_type, Confidence.MEDIUM, "Currency pattern detected")

    if has_income_phrase:
        return DetectionResult(
            CaptureType.INCOME, Confidence.MEDIUM, "Contains income-related phrase"
        )

    if has_expense_phrase:
        return DetectionResult(
            CaptureType.EXPENSE, Confidence.MEDIUM, "Contains expense-related phrase"
        )

    if _contains_any(untagged, IDEA_PATTERN):
        return DetectionResult(
            CaptureType.IDEA, Confidence.MEDIUM, "Contains idea-related phrase"
        )

    if any(pattern.search(trimmed) for pattern in TIME_DATE_PATTERNS):
        return DetectionResult(
            CaptureType.TASK, Confidence.HIGH, "Contains time/date pattern"
        )

    if _starts_with_action_verb(trimmed):
        return DetectionResult(
            CaptureType.TASK, Confidence.MEDIUM, "Starts with action verb"
        )

    return DetectionResult(CaptureType.TASK, Confidence.LOW, "Default")


def detect_capture_type(input_text: str) -> CaptureType:
    """Suggested capture type without confidence or reason."""
    return classify(input_text).suggested_type


def clean_idea_input(input_text: str) -> str:
    """Remove a leading ``#idea`` or ``idea:`` marker."""
    cleaned = input_text.strip()
    if cleaned.lower().startswith(("#idea", "idea:")):
        cleaned = cleaned[5:].strip()
    return cleaned


def classify_capture(state: CaptureState) -> dict:
    """Classify the capture input."""
    if state.get("error"):
        return {}

    try:
        result = classify(state.get("input_text") or "")
    except Exception as e:
        logger.error(f"Capture classification failed: {e}")
        return create_error_response(
            e, suggested_type=CaptureType.TASK.value, confidence=Confidence.LOW.value
        )

    logger.debug(
        f"Classified capture as {result.suggested_type.value} "
        f"({result.confidence.value}): {result.reason}"
    )
    return result.to_dict()


def clean_idea(state: CaptureState) -> dict:
    """Strip idea markers so the idea can be saved as-is."""
    if state.get("error"):
        return {}

    return {"idea_content": clean_idea_input(state.get("input_text") or "")}
