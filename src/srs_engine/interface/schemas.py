"""Request models for JSON read by the CLI. Field names accept snake_case or camelCase."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from srs_engine.domain.models import BatchItem, SchedulableItem
from srs_engine.domain.stats.models import ReviewLogEntry


def _assume_utc(v: datetime | None) -> datetime | None:
    if v is not None and v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BatchItemIn(_Record):
    id: str | int
    quality: int
    repetitions: int = 0
    interval: int = 1
    ease_factor: float = 2.5

    def to_domain(self) -> BatchItem:
        return BatchItem(
            id=self.id,
            quality=self.quality,
            repetitions=self.repetitions,
            interval=self.interval,
            ease_factor=self.ease_factor,
        )


class SchedulableItemIn(_Record):
    id: str | int
    next_review: datetime
    ease_factor: float = 2.5
    repetitions: int = 0
    manual_priority: int | None = None

    @field_validator("next_review")
    @classmethod
    def tz_aware(cls, v: datetime) -> datetime:
        return _assume_utc(v)

    def to_domain(self) -> SchedulableItem:
        return SchedulableItem(
            id=self.id,
            next_review=self.next_review,
            ease_factor=self.ease_factor,
            repetitions=self.repetitions,
            manual_priority=self.manual_priority,
        )


class ReviewLogEntryIn(_Record):
    # Range checks happen in the aggregator so its skip/strict policy applies.
    quality: int
    interval: int
    timestamp: datetime | None = None
    review_duration_seconds: float | None = None

    @field_validator("timestamp")
    @classmethod
    def tz_aware(cls, v: Any) -> Any:
        return _assume_utc(v)

    def to_domain(self) -> ReviewLogEntry:
        return ReviewLogEntry(
            quality=self.quality,
            interval=self.interval,
            timestamp=self.timestamp,
            review_duration_seconds=self.review_duration_seconds,
        )
