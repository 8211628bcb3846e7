"""
Domain models for review scheduling.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from .constants import DEFAULT_EASE_FACTOR, DEFAULT_INTERVAL


class DifficultyClass(str, Enum):
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"


@dataclass(frozen=True)
class ReviewState:
    """
    Scheduling state of one learnable item.

    Attributes:
        interval: Days until the next review (1-365).
        ease_factor: Interval growth multiplier, never below 1.3.
        repetitions: Consecutive successful reviews since the last reset.
        next_review: When the item becomes due.
    """

    interval: int
    ease_factor: float
    repetitions: int
    next_review: datetime

    @classmethod
    def new(cls, now: datetime) -> "ReviewState":
        """Initial state for an item that has never been reviewed."""
        return cls(
            interval=DEFAULT_INTERVAL,
            ease_factor=DEFAULT_EASE_FACTOR,
            repetitions=0,
            next_review=now,
        )


@dataclass(frozen=True)
class CalculationResult:
    """
    Output of one SM-2 step.

    next_review is None only for entries held in the calculation cache,
    which are independent of the time of the call.
    """

    interval: int
    repetitions: int
    ease_factor: float
    next_review: datetime | None
    confidence: float
    difficulty_class: DifficultyClass

    def to_state(self) -> ReviewState:
        if self.next_review is None:
            raise ValueError("Cannot build a ReviewState from a time-independent result")
        return ReviewState(
            interval=self.interval,
            ease_factor=self.ease_factor,
            repetitions=self.repetitions,
            next_review=self.next_review,
        )


@dataclass(frozen=True)
class SchedulableItem:
    """Read-only projection of a ReviewState plus identity, fed to the queue builder."""

    id: Any
    next_review: datetime
    ease_factor: float
    repetitions: int
    manual_priority: int | None = None


@dataclass(frozen=True)
class QueueEntry:
    id: Any
    scheduled_time: datetime
    priority: int


@dataclass(frozen=True)
class BatchItem:
    id: Any
    quality: int
    repetitions: int
    interval: int
    ease_factor: float


@dataclass(frozen=True)
class BatchItemResult:
    id: Any
    result: CalculationResult


@dataclass(frozen=True)
class BatchResult:
    items: list[BatchItemResult]
    duration_ms: float
