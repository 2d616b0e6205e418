"""
In-memory generation log with per-user isolation.
"""

import csv
import logging
from collections import defaultdict
from datetime import datetime
from pathlib import Path
from typing import Protocol

from ..constants import (
    CSV_EXPORT_FIELDS,
    FEEDBACK_TAGS,
    MAX_RATING,
    MIN_RATING,
    TIMESTAMP_FORMAT,
)
from ..exceptions import RatingsFetchError, ValidationError
from ..models.feedback import RatedGeneration
from ..utils.statistics import RatingStatistics, calculate_rating_statistics

logger = logging.getLogger(__name__)


class RatingsLogReader(Protocol):
    """Read access to the log of rated generations."""

    def fetch_rated_generations(
        self,
        user_id: str,
        content_types: list[str] | None,
        limit: int,
    ) -> list[RatedGeneration]:
        """Return up to ``limit`` rated generations, newest first.

        ``content_types=None`` means every content type.
        """
        ...


class InMemoryGenerationStore:
    """In-memory generation log keyed by user"""

    def __init__(self):
        # user_id -> generations in insertion order
        self._generations: dict[str, list[RatedGeneration]] = defaultdict(list)

    def record_generation(
        self,
        user_id: str,
        content_type: str,
        generated_copy: str = "",
        created_at: datetime | None = None,
    ) -> RatedGeneration:
        """Append an unrated generation to the log"""
        generation = RatedGeneration(
            content_type=content_type,
            user_id=user_id,
            generated_copy=generated_copy,
            created_at=created_at or datetime.now(),
        )
        self._generations[user_id].append(generation)
        return generation

    def add_generation(self, generation: RatedGeneration) -> None:
        """Append an existing record, rated or not"""
        self._generations[generation.user_id].append(generation)

    def get_generation(self, user_id: str, generation_id: str) -> RatedGeneration | None:
        """Get a specific generation by id"""
        for generation in self._generations[user_id]:
            if generation.generation_id == generation_id:
                return generation
        return None

    def rate_generation(
        self,
        user_id: str,
        generation_id: str,
        rating: float,
        feedback_tags: list[str] | None = None,
        feedback_text: str | None = None,
    ) -> RatedGeneration:
        """Store a user's rating and feedback tags on a generation.

        Raises:
            ValidationError: If the generation is unknown, the rating is
                outside 0-10 or a tag is not in the feedback vocabulary

        """
        generation = self.get_generation(user_id, generation_id)
        if generation is None:
            raise ValidationError(f"Unknown generation: {generation_id}")

        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}"
            )

        tags = list(feedback_tags or [])
        unknown = [tag for tag in tags if tag not in FEEDBACK_TAGS]
        if unknown:
            raise ValidationError(f"Unknown feedback tags: {', '.join(unknown)}")

        generation.rating = rating
        generation.feedback_tags = tags
        generation.feedback_text = feedback_text or None
        logger.info(
            f"Rated generation {generation_id} ({generation.content_type}): "
            f"{rating}/10 tags={tags}"
        )
        return generation

    def delete_generation(self, user_id: str, generation_id: str) -> bool:
        """Delete a generation from the log"""
        generation = self.get_generation(user_id, generation_id)
        if generation is None:
            return False
        self._generations[user_id].remove(generation)
        return True

    def get_generations(
        self, user_id: str, content_type: str | None = None
    ) -> list[RatedGeneration]:
        """Get a user's generations, newest first"""
        generations = [
            g for g in self._generations[user_id]
            if content_type is None or g.content_type == content_type
        ]
        return sorted(generations, key=lambda g: g.created_at, reverse=True)

    def fetch_rated_generations(
        self,
        user_id: str,
        content_types: list[str] | None,
        limit: int,
    ) -> list[RatedGeneration]:
        """Rated generations for the given content types, newest first"""
        wanted = set(content_types) if content_types is not None else None
        rated = [
            g for g in self.get_generations(user_id)
            if g.is_rated and (wanted is None or g.content_type in wanted)
        ]
        return rated[:limit]

    def get_statistics(self, user_id: str, content_type: str | None = None) -> RatingStatistics:
        """Get rating statistics for a user"""
        return calculate_rating_statistics(self.get_generations(user_id, content_type))

    def get_generation_count(self, user_id: str) -> int:
        """Get total number of generations for a user"""
        return len(self._generations[user_id])

    def clear_user(self, user_id: str) -> None:
        """Clear all generations for a user"""
        if user_id in self._generations:
            del self._generations[user_id]

    def clear_all(self) -> None:
        """Clear all generations (for testing purposes)"""
        self._generations.clear()

    def export_to_csv(self, filepath: Path, user_id: str | None = None) -> int:
        """Export the log to a CSV file.

        Args:
            filepath: Path to save the CSV file
            user_id: Optional user to filter by

        Returns:
            Number of rows written

        """
        user_ids = [user_id] if user_id is not None else list(self._generations)
        rows = 0
        with open(filepath, "w", newline="", encoding="utf-8") as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=CSV_EXPORT_FIELDS)
            writer.writeheader()
            for uid in user_ids:
                for generation in self.get_generations(uid):
                    writer.writerow({
                        "generation_id": generation.generation_id,
                        "user_id": uid,
                        "content_type": generation.content_type,
                        "rating": "" if generation.rating is None else generation.rating,
                        "feedback_tags": "|".join(generation.tags),
                        "feedback_text": generation.feedback_text or "",
                        "created_at": generation.created_at.strftime(TIMESTAMP_FORMAT),
                    })
                    rows += 1
        return rows

    def import_from_csv(self, filepath: Path) -> int:
        """Load generations from a CSV file written by ``export_to_csv``.

        Returns:
            Number of rows loaded

        Raises:
            RatingsFetchError: If the file cannot be read or a row is
                malformed. No rows are loaded in that case.

        """
        try:
            with open(filepath, newline="", encoding="utf-8") as csvfile:
                generations = [
                    self._row_to_generation(row, line_number)
                    for line_number, row in enumerate(csv.DictReader(csvfile), start=2)
                ]
        except (OSError, UnicodeDecodeError) as e:
            raise RatingsFetchError(f"Cannot read generation log {filepath}: {e!s}") from e

        # Nothing is stored unless every row parsed
        for generation in generations:
            self.add_generation(generation)
        logger.info(f"Loaded {len(generations)} generations from {filepath}")
        return len(generations)

    @staticmethod
    def _row_to_generation(row: dict[str, str], line_number: int) -> RatedGeneration:
        rating = row.get("rating") or ""
        tags = row.get("feedback_tags") or ""
        created_at = row.get("created_at") or ""
        try:
            return RatedGeneration(
                generation_id=row["generation_id"],
                user_id=row["user_id"],
                content_type=row["content_type"],
                rating=float(rating) if rating else None,
                feedback_tags=tags.split("|") if tags else [],
                feedback_text=row.get("feedback_text") or None,
                created_at=(
                    datetime.strptime(created_at, TIMESTAMP_FORMAT)
                    if created_at else datetime.now()
                ),
            )
        except (KeyError, ValueError) as e:
            raise RatingsFetchError(f"Malformed generation log row {line_number}: {e!s}") from e
