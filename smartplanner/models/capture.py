"""Capture types and structures derived from quick-capture input."""

from dataclasses import dataclass, field
import datetime
from enum import Enum
from typing import Any

from ..constants import TASK_DATE_FORMAT, TASK_STATUS_DEFAULT


class CaptureType(str, Enum):
    """Coarse category assigned to a raw capture snippet."""

    TASK = "task"
    IDEA = "idea"
    CONTENT = "content"
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        return self.value.title()

    @classmethod
    def from_string(cls, value: str | None) -> "CaptureType | None":
        """Create CaptureType from string value."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class Confidence(str, Enum):
    """How sure the classifier is about a suggested capture type."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class DetectionResult:
    """Suggested capture type for a piece of input text."""

    suggested_type: CaptureType
    confidence: Confidence
    reason: str = ""

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for serialization."""
        return {
            "suggested_type": self.suggested_type.value,
            "confidence": self.confidence.value,
            "reason": self.reason,
        }


@dataclass
class ParsedTask:
    """Structured task fields pulled out of natural-language input."""

    text: str
    date: datetime.date | None = None
    time: str | None = None
    duration: int | None = None  # minutes
    priority: str | None = None  # "high", "medium", "low"
    tags: list[str] = field(default_factory=list)
    project_id: str | None = None

    def add_tag(self, tag: str) -> None:
        """Add a tag chip, ignoring blanks and duplicates."""
        tag = tag.strip().lstrip("#")
        if tag and tag not in self.tags:
            self.tags.append(tag)

    def remove_tag(self, tag: str) -> None:
        """Remove a tag chip if present."""
        if tag in self.tags:
            self.tags.remove(tag)

    def to_task_payload(self) -> dict[str, Any]:
        """Build the body sent to the task persistence endpoint."""
        return {
            "task_text": self.text,
            "scheduled_date": self.date.strftime(TASK_DATE_FORMAT) if self.date else None,
            "priority": self.priority,
            "estimated_minutes": self.duration,
            "context_tags": list(self.tags) if self.tags else None,
            "project_id": self.project_id,
            "status": TASK_STATUS_DEFAULT,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert parsed task to dictionary for serialization."""
        return {
            "text": self.text,
            "date": self.date.isoformat() if self.date else None,
            "time": self.time,
            "duration": self.duration,
            "priority": self.priority,
            "tags": list(self.tags),
            "project_id": self.project_id,
        }
