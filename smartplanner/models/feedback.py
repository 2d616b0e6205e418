"""Feedback data models for learning from rated generations."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4


@dataclass
class RatedGeneration:
    """One row of the generation log, as read by the learning engine."""

    content_type: str
    rating: float | None = None
    feedback_tags: list[str] | None = None
    created_at: datetime = field(default_factory=datetime.now)
    generation_id: str = field(default_factory=lambda: str(uuid4()))
    user_id: str = ""
    generated_copy: str = ""
    feedback_text: str | None = None

    @property
    def is_rated(self) -> bool:
        return self.rating is not None

    @property
    def tags(self) -> list[str]:
        """Feedback tags, empty when none were recorded."""
        return list(self.feedback_tags or [])


@dataclass
class FeedbackPattern:
    """Aggregate of a user's feedback for one content family."""

    content_type: str
    avg_rating: float = 0.0
    total_generations: int = 0
    common_issues: list[str] = field(default_factory=list)
    improvement_areas: list[str] = field(default_factory=list)
    success_factors: list[str] = field(default_factory=list)

    @property
    def is_cross_type_only(self) -> bool:
        """True for patterns built purely from the user's other content types."""
        return self.total_generations == 0


@dataclass
class ToneShift:
    """Shift from the voice profile baseline, each in [-2, 2]."""

    formality_shift: int = 0
    energy_shift: int = 0
    emotion_shift: int = 0

    def is_neutral(self) -> bool:
        return self.formality_shift == 0 and self.energy_shift == 0 and self.emotion_shift == 0


@dataclass
class AdaptiveParams:
    """Generation-parameter adjustments learned from feedback."""

    temperature_adjustment: float = 0.0
    tone_shift: ToneShift = field(default_factory=ToneShift)
    strategic_guidance: list[str] = field(default_factory=list)
    avoid_patterns: list[str] = field(default_factory=list)
    emphasize_patterns: list[str] = field(default_factory=list)

    @classmethod
    def neutral(cls) -> "AdaptiveParams":
        """Parameters that leave generation untouched."""
        return cls()

    def is_neutral(self) -> bool:
        return (
            self.temperature_adjustment == 0
            and self.tone_shift.is_neutral()
            and not self.strategic_guidance
            and not self.avoid_patterns
            and not self.emphasize_patterns
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "temperature_adjustment": self.temperature_adjustment,
            "tone_shift": {
                "formality_shift": self.tone_shift.formality_shift,
                "energy_shift": self.tone_shift.energy_shift,
                "emotion_shift": self.tone_shift.emotion_shift,
            },
            "strategic_guidance": list(self.strategic_guidance),
            "avoid_patterns": list(self.avoid_patterns),
            "emphasize_patterns": list(self.emphasize_patterns),
        }


@dataclass(frozen=True)
class TagAdjustment:
    """Hand-authored adjustment applied when a feedback tag is recognized."""

    temperature: float = 0.0
    formality_shift: int = 0
    energy_shift: int = 0
    emotion_shift: int = 0
    guidance: str | None = None
    avoid: tuple[str, ...] = ()
    emphasize: tuple[str, ...] = ()


@dataclass
class UniversalPatterns:
    """Style preferences that hold across every content type."""

    formality_preference: str = "neutral"  # "more_casual", "more_formal", "neutral"
    tone_alignment: str = "neutral"  # "off", "aligned", "neutral"
    length_preference: str = "neutral"  # "shorter", "longer", "neutral"
    emotion_level: str = "neutral"  # "higher", "neutral"


@dataclass
class GlobalLearnings:
    """Cross-content-type view of a user's feedback."""

    universal_patterns: UniversalPatterns = field(default_factory=UniversalPatterns)
    success_factors: list[str] = field(default_factory=list)
    common_issues: list[str] = field(default_factory=list)
    total_rated_across_types: int = 0
