import logging
import re

from ...config import (
    AI_PATTERNS,
    BULLET_BLOCK_PATTERN,
    BULLET_LINE_PATTERN,
    COLON_SETUP_PATTERN,
    DETECTION_THRESHOLDS,
    EM_DASH_PATTERN,
    FORBIDDEN_PHRASES,
    PARAGRAPH_SPLIT_PATTERN,
    PARENTHETICAL_PATTERN,
    QUALIFIER_WORDS,
    SENTENCE_SPLIT_PATTERN,
    TRIPLE_ADJECTIVE_PATTERN,
)
from ...constants import MAX_AI_SCORE, MIN_AI_SCORE
from ...models.detection import AIDetectionAssessment, AIDetectionResult
from ...utils.error_handling import create_error_response
from ...utils.statistics import calculate_variance
from ..state import GenerationState

logger = logging.getLogger(__name__)

_QUALIFIER_PATTERNS = [
    re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE) for word in QUALIFIER_WORDS
]


def _split_sentences(text: str) -> list[str]:
    return [s for s in SENTENCE_SPLIT_PATTERN.split(text) if s.strip()]


def _split_paragraphs(text: str) -> list[str]:
    return [p for p in PARAGRAPH_SPLIT_PATTERN.split(text) if p.strip()]


def check_ai_detection(text: str) -> AIDetectionResult:
    """Score copy for patterns that make it read as machine-written.

    Every rule is evaluated against the full text and only ever adds to
    the score, which is capped at 10. Each rule that fires appends one
    warning and the suggestion at the same index.

    Args:
        text: Finished copy to analyze

    Returns:
        AIDetectionResult with score, warnings and suggestions

    """
    result = AIDetectionResult()
    lower_text = text.lower()
    sentences = _split_sentences(text)
    paragraphs = _split_paragraphs(text)
    thresholds = DETECTION_THRESHOLDS

    # Forbidden phrases: every distinct phrase counts
    for phrase in FORBIDDEN_PHRASES:
        if phrase in lower_text:
            result.add_flag(
                2,
                f'Contains AI phrase: "{phrase}"',
                f'Remove or rephrase: "{phrase}"',
            )

    # Generic assistant patterns: once per pattern, not per occurrence
    for pattern in AI_PATTERNS:
        match = pattern.search(text)
        if match:
            result.add_flag(
                1,
                f'Generic AI pattern: "{match.group(0)}"',
                f'Rephrase or remove: "{match.group(0)}"',
            )

    exclamations = text.count("!")
    if sentences and exclamations > len(sentences) * thresholds["exclamations_per_sentence"]:
        result.add_flag(
            1,
            "Too many exclamation points",
            "Use exclamations more sparingly (max 1 per 3-4 sentences)",
        )

    em_dashes = len(EM_DASH_PATTERN.findall(text))
    if paragraphs and em_dashes > len(paragraphs) * thresholds["em_dashes_per_paragraph"]:
        result.add_flag(1, "Too many em dashes", "Maximum 2 em dashes per paragraph")

    parentheticals = len(PARENTHETICAL_PATTERN.findall(text))
    if paragraphs and parentheticals > len(paragraphs) * thresholds["parentheticals_per_paragraph"]:
        result.add_flag(1, "Too many parentheticals", "Maximum 1 parenthetical per paragraph")

    qualifier_count = sum(len(p.findall(text)) for p in _QUALIFIER_PATTERNS)
    if sentences and qualifier_count > len(sentences) * thresholds["qualifiers_per_sentence"]:
        result.add_flag(
            1,
            "Too many qualifier words (really, very, actually, etc.)",
            "Remove unnecessary qualifiers - be direct",
        )

    if TRIPLE_ADJECTIVE_PATTERN.search(text):
        result.add_flag(
            1,
            "Multiple adjectives in sequence (common AI pattern)",
            "Use single, strong adjectives instead of lists",
        )

    if len(sentences) > thresholds["min_sentences_for_variance"]:
        lengths = [len(s.split()) for s in sentences]
        if calculate_variance(lengths) < thresholds["min_sentence_variance"]:
            result.add_flag(
                1,
                "Sentences are too uniform in length",
                "Vary sentence length: short (3-7 words), medium (8-15), long (16-25)",
            )

    colon_setups = len(COLON_SETUP_PATTERN.findall(text))
    if colon_setups > thresholds["max_colon_setups"]:
        result.add_flag(
            1,
            "Too many colon setups",
            "Vary your sentence structures - not every point needs a colon setup",
        )

    bullets = len(BULLET_LINE_PATTERN.findall(text))
    prose_words = len(BULLET_BLOCK_PATTERN.sub("", text).split())
    if bullets > thresholds["max_bullets"] and prose_words < bullets * thresholds["prose_words_per_bullet"]:
        result.add_flag(
            1,
            "Too many bullet points relative to prose",
            "Balance lists with conversational paragraphs",
        )

    result.score = min(MAX_AI_SCORE, max(MIN_AI_SCORE, result.score))
    return result


def get_ai_detection_assessment(score: int) -> AIDetectionAssessment:
    """Map an AI detection score to a display level."""
    if score <= 1:
        return AIDetectionAssessment("excellent", "Excellent", "Sounds completely human")
    if score <= 3:
        return AIDetectionAssessment(
            "good", "Good", "Mostly human, minor tweaks suggested"
        )
    if score <= 5:
        return AIDetectionAssessment(
            "warning", "Needs Work", "Some AI patterns detected - review suggestions"
        )
    return AIDetectionAssessment(
        "danger", "High Risk", "Multiple AI tells - significant rewrite needed"
    )


def detect_ai_patterns(state: GenerationState) -> dict:
    """Score the generated copy for AI tells."""
    if state.get("error"):
        return {}

    copy_text = state.get("generated_copy") or ""
    try:
        result = check_ai_detection(copy_text)
    except Exception as e:
        logger.error(f"AI pattern check failed: {e}")
        return create_error_response(e, ai_score=None)

    assessment = get_ai_detection_assessment(result.score)
    if result.score > 5:
        logger.warning(
            f"Generated {state.get('content_type')} copy scored {result.score}/10 "
            f"for AI patterns: {'; '.join(result.warnings[:3])}"
        )
    else:
        logger.info(f"AI pattern score {result.score}/10 ({assessment.level})")

    return {
        "ai_score": result.score,
        "ai_warnings": result.warnings,
        "ai_suggestions": result.suggestions,
        "ai_assessment": assessment.level,
    }
