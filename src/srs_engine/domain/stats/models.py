"""
Domain models for review analytics.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ReviewLogEntry:
    """
    A single historical review event.

    Attributes:
        quality: Rating given (0-5).
        interval: Interval in days assigned after this review.
        timestamp: When the review happened.
        review_duration_seconds: Time spent answering, if recorded.
    """

    quality: int
    interval: int
    timestamp: datetime | None = None
    review_duration_seconds: float | None = None


def _empty_distribution() -> dict[str, int]:
    return {"easy": 0, "normal": 0, "hard": 0}


@dataclass
class AnalyticsSummary:
    """Retention analytics over a review log."""

    total_reviews: int = 0
    average_quality: float = 0.0
    retention_rate: float = 0.0  # percent, 1 decimal
    average_interval: float = 0.0
    difficulty_distribution: dict[str, int] = field(default_factory=_empty_distribution)
    streak_count: int = 0
    average_review_duration: float = 0.0
    skipped_entries: int = 0


@dataclass(frozen=True)
class DistributionBucket:
    label: str
    count: int
    percentage: float = 0.0


@dataclass(frozen=True)
class MasterySummary:
    total_items: int
    mastered_items: int  # repetitions >= 5
    new_items: int  # repetitions == 0
    mastery_percentage: float


@dataclass(frozen=True)
class StreakSummary:
    current_streak: int
    longest_streak: int
    total_study_days: int
