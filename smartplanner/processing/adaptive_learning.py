"""Learns per-user style preferences from rated generations.

Ratings and feedback tags from a user's recent generations are aggregated
into a ``FeedbackPattern`` for the requested content family, then turned
into ``AdaptiveParams`` that nudge the next generation: a temperature
adjustment, tone shifts, and guidance lines for the prompt.
"""

import logging
from collections import Counter

from ..config import ADAPTIVE_CONFIG
from ..constants import UNIVERSAL_FEEDBACK_TAGS
from ..models.content_type import get_family_members
from ..models.feedback import (
    AdaptiveParams,
    FeedbackPattern,
    GlobalLearnings,
    RatedGeneration,
    TagAdjustment,
    ToneShift,
    UniversalPatterns,
)
from ..utils.statistics import calculate_mean, count_tags, tags_meeting_threshold
from .generation_store import RatingsLogReader

logger = logging.getLogger(__name__)


# Adjustments applied when a tag shows up in a pattern's common issues
ISSUE_ADJUSTMENTS: dict[str, TagAdjustment] = {
    "too_formal": TagAdjustment(
        temperature=0.1,
        formality_shift=-1,
        guidance=(
            "USER PREFERENCE: Write more casually than voice samples suggest. "
            "Be conversational, almost informal."
        ),
    ),
    "too_casual": TagAdjustment(
        temperature=-0.1,
        formality_shift=1,
        guidance=(
            "USER PREFERENCE: Be more professional and polished than voice samples suggest."
        ),
    ),
    "too_long": TagAdjustment(
        guidance=(
            "USER PREFERENCE: Be CONCISE. Cut 20% from typical length. "
            "Get to the point faster."
        ),
        avoid=("Long warm-up intros and filler",),
    ),
    "too_short": TagAdjustment(
        guidance=(
            "USER PREFERENCE: Expand more. Add more detail, examples, and depth than usual."
        ),
    ),
    "needs_more_emotion": TagAdjustment(
        temperature=0.15,
        emotion_shift=2,
        guidance=(
            "USER PREFERENCE: Be MORE emotional and expressive than voice samples show. "
            "Share feelings, use vivid language, connect emotionally."
        ),
    ),
    "too_salesy": TagAdjustment(
        energy_shift=-1,
        guidance=(
            "USER PREFERENCE: REDUCE sales language. Be more educational and helpful, "
            "less pushy. Soft sell only."
        ),
        avoid=("Hard CTAs", "Urgent language", "Scarcity tactics"),
    ),
    "bland_generic": TagAdjustment(
        temperature=0.2,
        guidance=(
            "USER PREFERENCE: Be MORE specific and unique. Use concrete details, "
            "unusual angles, distinctive voice. Stand out."
        ),
    ),
    "wrong_tone": TagAdjustment(
        guidance=(
            "USER PREFERENCE: Voice match is off. Study the writing samples more carefully "
            "and match the exact tone, not just the words."
        ),
    ),
    "missing_cta": TagAdjustment(
        guidance=(
            "USER PREFERENCE: Always include a CLEAR call-to-action. "
            "Tell them exactly what to do next."
        ),
    ),
}

# Adjustments applied when a tag shows up in a pattern's success factors
SUCCESS_ADJUSTMENTS: dict[str, TagAdjustment] = {
    "great_hook": TagAdjustment(
        guidance="USER LOVES: Strong, attention-grabbing hooks. Prioritize this.",
        emphasize=("Strong hooks",),
    ),
    "perfect_tone": TagAdjustment(
        guidance="USER LOVES: The current voice match. Keep the tone exactly where it is.",
        emphasize=("Current tone of voice",),
    ),
    "great_story": TagAdjustment(
        guidance="USER LOVES: Personal, specific stories. Keep weaving them in.",
        emphasize=("Personal storytelling",),
    ),
    "clear_cta": TagAdjustment(
        guidance="USER LOVES: One clear, direct call-to-action. Keep it that way.",
        emphasize=("Clear calls-to-action",),
    ),
}

LOW_RATING_GUIDANCE = (
    "CRITICAL: Recent ratings have been low. Take extra care with voice matching "
    "and strategy alignment."
)
HIGH_RATING_GUIDANCE = "SUCCESS: User loves this style. Maintain current approach."


def _clamp(value: float, limit: float) -> float:
    return max(-limit, min(limit, value))


def _issue_threshold(low_rated_count: int) -> float:
    return max(
        ADAPTIVE_CONFIG["min_tag_count"],
        ADAPTIVE_CONFIG["issue_threshold_ratio"] * low_rated_count,
    )


def _success_threshold(high_rated_count: int) -> float:
    return max(
        ADAPTIVE_CONFIG["min_tag_count"],
        ADAPTIVE_CONFIG["success_threshold_ratio"] * high_rated_count,
    )


def _split_by_rating(
    generations: list[RatedGeneration],
) -> tuple[list[RatedGeneration], list[RatedGeneration]]:
    """Low-rated (<7) and high-rated (>=8) generations; 7 counts as neither."""
    low = [g for g in generations if g.rating < ADAPTIVE_CONFIG["low_rating_below"]]
    high = [g for g in generations if g.rating >= ADAPTIVE_CONFIG["high_rating_from"]]
    return low, high


def _universal_only(tags: list[str]) -> list[str]:
    return [tag for tag in tags if tag in UNIVERSAL_FEEDBACK_TAGS]


def _prefer(counts: Counter[str], tag: str, opposite: str, answer: str) -> str | None:
    if counts[tag] >= ADAPTIVE_CONFIG["min_tag_count"] and counts[tag] > counts[opposite]:
        return answer
    return None


def generate_adaptive_params(pattern: FeedbackPattern | None) -> AdaptiveParams:
    """Turn a feedback pattern into generation adjustments.

    Patterns backed by fewer than three generations are ignored and the
    neutral parameters are returned.

    Args:
        pattern: Output of ``AdaptiveLearningEngine.analyze_feedback_patterns``

    Returns:
        AdaptiveParams with temperature kept within +/-0.2 and tone shifts
        within +/-2

    """
    if pattern is None or pattern.total_generations < ADAPTIVE_CONFIG["min_generations"]:
        return AdaptiveParams.neutral()

    temperature = 0.0
    formality = energy = emotion = 0
    guidance: list[str] = []
    avoid: list[str] = []
    emphasize: list[str] = []

    triggered = [
        ISSUE_ADJUSTMENTS[tag] for tag in ISSUE_ADJUSTMENTS if tag in pattern.common_issues
    ] + [
        SUCCESS_ADJUSTMENTS[tag] for tag in SUCCESS_ADJUSTMENTS if tag in pattern.success_factors
    ]

    for adjustment in triggered:
        temperature += adjustment.temperature
        formality += adjustment.formality_shift
        energy += adjustment.energy_shift
        emotion += adjustment.emotion_shift
        if adjustment.guidance:
            guidance.append(adjustment.guidance)
        avoid.extend(p for p in adjustment.avoid if p not in avoid)
        emphasize.extend(p for p in adjustment.emphasize if p not in emphasize)

    if pattern.avg_rating < ADAPTIVE_CONFIG["low_avg_rating"]:
        guidance.append(LOW_RATING_GUIDANCE)
    if pattern.avg_rating >= ADAPTIVE_CONFIG["high_avg_rating"]:
        guidance.append(HIGH_RATING_GUIDANCE)

    max_shift = ADAPTIVE_CONFIG["max_tone_shift"]
    return AdaptiveParams(
        temperature_adjustment=round(
            _clamp(temperature, ADAPTIVE_CONFIG["max_temperature_adjustment"]), 2
        ),
        tone_shift=ToneShift(
            formality_shift=int(_clamp(formality, max_shift)),
            energy_shift=int(_clamp(energy, max_shift)),
            emotion_shift=int(_clamp(emotion, max_shift)),
        ),
        strategic_guidance=guidance,
        avoid_patterns=avoid,
        emphasize_patterns=emphasize,
    )


class AdaptiveLearningEngine:
    """Aggregates a user's rated generations into style preferences."""

    generate_adaptive_params = staticmethod(generate_adaptive_params)

    def __init__(self, reader: RatingsLogReader) -> None:
        self.reader = reader

    def _fetch(
        self, user_id: str, content_types: list[str] | None, limit: int
    ) -> list[RatedGeneration]:
        """Read rated generations, treating any read failure as no data."""
        try:
            generations = self.reader.fetch_rated_generations(user_id, content_types, limit)
        except Exception as e:
            logger.warning(
                f"Could not read rated generations for user {user_id}: {e!s}. "
                "Continuing without personalization."
            )
            return []

        return [g for g in (generations or []) if g.rating is not None][:limit]

    def get_global_learnings(self, user_id: str) -> GlobalLearnings | None:
        """Summarize feedback across every content type.

        Only universal tags are reported as issues or success factors, so
        content-specific feedback such as length never leaks between
        families.

        Args:
            user_id: User whose generations to read

        Returns:
            GlobalLearnings, or None when the user has no rated generations

        """
        generations = self._fetch(user_id, None, ADAPTIVE_CONFIG["global_window"])
        if not generations:
            return None

        low, high = _split_by_rating(generations)
        low_counts = count_tags(g.tags for g in low)
        high_counts = count_tags(g.tags for g in high)

        common_issues = _universal_only(
            tags_meeting_threshold(low_counts, _issue_threshold(len(low)))
        )
        success_factors = _universal_only(
            tags_meeting_threshold(high_counts, _success_threshold(len(high)))
        )

        universal = UniversalPatterns(
            formality_preference=(
                _prefer(low_counts, "too_formal", "too_casual", "more_casual")
                or _prefer(low_counts, "too_casual", "too_formal", "more_formal")
                or "neutral"
            ),
            tone_alignment=(
                "off" if "wrong_tone" in common_issues
                else "aligned" if "perfect_tone" in success_factors
                else "neutral"
            ),
            length_preference=(
                _prefer(low_counts, "too_long", "too_short", "shorter")
                or _prefer(low_counts, "too_short", "too_long", "longer")
                or "neutral"
            ),
            emotion_level=(
                "higher"
                if low_counts["needs_more_emotion"] >= ADAPTIVE_CONFIG["min_tag_count"]
                else "neutral"
            ),
        )

        return GlobalLearnings(
            universal_patterns=universal,
            success_factors=success_factors,
            common_issues=common_issues,
            total_rated_across_types=len(generations),
        )

    def analyze_feedback_patterns(
        self, user_id: str, content_type: str
    ) -> FeedbackPattern | None:
        """Aggregate a user's feedback for a content type's family.

        Args:
            user_id: User whose generations to read
            content_type: Content type about to be generated

        Returns:
            FeedbackPattern, a cross-type-only pattern when the family has
            no history but the user has rated at least three generations
            elsewhere, or None when there is nothing to learn from

        """
        family = get_family_members(content_type)
        generations = self._fetch(user_id, family, ADAPTIVE_CONFIG["family_window"])
        global_learnings = self.get_global_learnings(user_id)

        if not generations:
            if (
                global_learnings is not None
                and global_learnings.total_rated_across_types >= ADAPTIVE_CONFIG["min_global_ratings"]
            ):
                logger.info(
                    f"No {content_type} history for user {user_id}; "
                    "using cross-type preferences only"
                )
                return FeedbackPattern(
                    content_type=content_type,
                    avg_rating=0.0,
                    total_generations=0,
                    common_issues=list(global_learnings.common_issues),
                    improvement_areas=[],
                    success_factors=list(global_learnings.success_factors),
                )
            return None

        avg_rating = calculate_mean([g.rating for g in generations])
        low, high = _split_by_rating(generations)

        low_counts = count_tags(g.tags for g in low)
        high_counts = count_tags(g.tags for g in high)
        if global_learnings is not None:
            low_counts.update(global_learnings.common_issues)
            high_counts.update(global_learnings.success_factors)

        common_issues = tags_meeting_threshold(low_counts, _issue_threshold(len(low)))
        success_factors = tags_meeting_threshold(high_counts, _success_threshold(len(high)))

        recent_issues = [
            tag for g in low[: ADAPTIVE_CONFIG["recent_low_rated"]] for tag in g.tags
        ]
        improvement_areas = list(dict.fromkeys(recent_issues))

        logger.debug(
            f"Feedback pattern for {content_type} ({len(generations)} rated, "
            f"avg {avg_rating:.1f}): issues={common_issues} successes={success_factors}"
        )

        return FeedbackPattern(
            content_type=content_type,
            avg_rating=avg_rating,
            total_generations=len(generations),
            common_issues=common_issues,
            improvement_areas=improvement_areas,
            success_factors=success_factors,
        )

    def get_adaptive_params(self, user_id: str, content_type: str) -> AdaptiveParams:
        """Adaptive parameters for the next generation of ``content_type``."""
        return generate_adaptive_params(self.analyze_feedback_patterns(user_id, content_type))
