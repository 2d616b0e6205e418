"""AI-pattern detection result models."""

from dataclasses import dataclass, field


@dataclass
class AIDetectionResult:
    """Score (0-10) of how machine-written a piece of copy reads.

    ``warnings`` and ``suggestions`` are paired by position.
    """

    score: int = 0
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def add_flag(self, points: int, warning: str, suggestion: str) -> None:
        """Record a triggered rule."""
        self.score += points
        self.warnings.append(warning)
        self.suggestions.append(suggestion)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "score": self.score,
            "warnings": list(self.warnings),
            "suggestions": list(self.suggestions),
        }


@dataclass(frozen=True)
class AIDetectionAssessment:
    """Human-readable reading of an AI detection score."""

    level: str  # "excellent", "good", "warning", "danger"
    label: str
    description: str
