"""
Queue builder for daily review sessions.

Builds ordered review queues by:
1. Filtering the pool down to due items
2. Ranking them: most overdue first, then hardest (lowest ease), then manual priority
3. Truncating to the session capacity
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta

from srs_engine.domain.models import QueueEntry, SchedulableItem

logger = logging.getLogger(__name__)


def build_review_queue(
    items: Iterable[SchedulableItem],
    capacity: int,
    now: datetime,
) -> list[QueueEntry]:
    """
    Build a ranked review queue from a pool of items.

    The ordering is total and deterministic: identical inputs always
    produce the identical queue.

    Args:
        items: Pool of candidate items (due or not)
        capacity: Maximum number of entries in the queue
        now: Reference time for dueness and overdue amounts

    Returns:
        Queue entries in review order. entry.scheduled_time is now + index
        seconds; entry.priority counts down from len(queue) to 1.
    """
    if capacity < 0:
        raise ValueError(f"Queue capacity must be >= 0, got {capacity}")

    due = [item for item in items if _is_due(item, now)]
    if not due:
        return []

    due.sort(key=lambda item: _rank_key(item, now))
    selected = due[:capacity]

    used = len(selected)
    queue = [
        QueueEntry(
            id=item.id,
            scheduled_time=now + timedelta(seconds=index),
            priority=used - index,
        )
        for index, item in enumerate(selected)
    ]

    logger.debug(f"Built review queue: {used} of {len(due)} due items (capacity {capacity})")
    return queue


def count_due(items: Iterable[SchedulableItem], now: datetime) -> int:
    """Number of items whose next review is at or before `now`."""
    return sum(1 for item in items if _is_due(item, now))


def _is_due(item: SchedulableItem, now: datetime) -> bool:
    return item.next_review <= now


def _rank_key(item: SchedulableItem, now: datetime) -> tuple[float, float, int, str]:
    """
    Sort key, ascending:
    overdue amount descending, ease ascending, manual priority descending, id.
    """
    overdue = (now - item.next_review).total_seconds()
    manual = item.manual_priority if item.manual_priority is not None else 0
    return (-overdue, item.ease_factor, -manual, str(item.id))
