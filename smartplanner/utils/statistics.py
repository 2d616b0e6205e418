"""Utility functions for calculating rating and text statistics."""

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from smartplanner.models.feedback import RatedGeneration


def calculate_variance(values: Sequence[float]) -> float:
    """Population variance of ``values``; 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.var(np.asarray(values, dtype=float)))


def calculate_mean(values: Sequence[float]) -> float:
    """Arithmetic mean of ``values``; 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=float)))


def count_tags(tag_lists: Iterable[Iterable[str]]) -> Counter[str]:
    """Count in how many tag lists each tag appears.

    A tag repeated inside one list is only counted once for that list.
    """
    counts: Counter[str] = Counter()
    for tags in tag_lists:
        counts.update(dict.fromkeys(tags, 1))
    return counts


def tags_meeting_threshold(counts: Counter[str], threshold: float) -> list[str]:
    """Tags with ``count >= threshold``, most frequent first.

    Ties keep first-seen order.
    """
    qualifying = [tag for tag, count in counts.items() if count >= threshold]
    return sorted(qualifying, key=lambda tag: counts[tag], reverse=True)


@dataclass
class RatingStatistics:
    """Container for generation rating statistics."""

    total: int
    rated: int
    avg_rating: float
    low_rated: int
    high_rated: int
    tag_counts: dict[str, int] = field(default_factory=dict)

    def to_display_string(self) -> str:
        """Format statistics for display."""
        return (
            f"Total: {self.total} | Rated: {self.rated} | Avg: {self.avg_rating:.1f} | "
            f"Low: {self.low_rated} | High: {self.high_rated}"
        )


def calculate_rating_statistics(
    generations: list["RatedGeneration"],
    low_rating_below: float = 7,
    high_rating_from: float = 8,
) -> RatingStatistics:
    """Calculate statistics for a list of generations.

    Args:
        generations: Generations to analyze, rated or not
        low_rating_below: Ratings under this count as low
        high_rating_from: Ratings at or above this count as high

    Returns:
        RatingStatistics object containing calculated statistics

    """
    rated = [g for g in generations if g.rating is not None]
    ratings = [float(g.rating) for g in rated if g.rating is not None]

    return RatingStatistics(
        total=len(generations),
        rated=len(rated),
        avg_rating=calculate_mean(ratings),
        low_rated=sum(1 for r in ratings if r < low_rating_below),
        high_rated=sum(1 for r in ratings if r >= high_rating_from),
        tag_counts=dict(count_tags(g.tags for g in rated)),
    )
