"""
Review Service: application layer orchestrator.

Loads review states from the repository, runs them through the SM-2
calculator or the queue builder, and persists the results.
"""

import logging
from typing import Any

from srs_engine.domain.constants import DEFAULT_QUEUE_CAPACITY
from srs_engine.domain.models import CalculationResult, QueueEntry, ReviewState, SchedulableItem
from srs_engine.domain.ports import ReviewStateRepository

from .queue_builder import build_review_queue
from .sm2_calculator import Sm2Calculator, validate_quality

logger = logging.getLogger(__name__)


class ReviewService:
    def __init__(
        self,
        state_repo: ReviewStateRepository,
        calculator: Sm2Calculator | None = None,
        queue_capacity: int = DEFAULT_QUEUE_CAPACITY,
    ):
        self._repo = state_repo
        self._calc = calculator or Sm2Calculator()
        self._queue_capacity = queue_capacity

    async def submit_review(self, item_id: Any, quality: int) -> CalculationResult:
        """
        Apply a rating to one item and persist its new state.

        Items with no stored state start from the default initial state.

        Raises:
            InvalidRating: If quality is outside [0, 5]. Nothing is saved.
        """
        validate_quality(quality, item_id)
        now = self._calc.clock()

        states = await self._repo.get_states([item_id])
        state = states.get(item_id) or ReviewState.new(now)

        result = self._calc.compute(
            quality, state.repetitions, state.interval, state.ease_factor, now=now
        )
        await self._repo.save_state(item_id, result.to_state())
        logger.debug(f"Item {item_id} rated {quality}: next review in {result.interval} days")
        return result

    async def build_daily_queue(
        self,
        item_ids: list[Any],
        capacity: int | None = None,
        manual_priorities: dict[Any, int] | None = None,
    ) -> list[QueueEntry]:
        """Build today's ranked review queue for the given items."""
        if not item_ids:
            return []
        now = self._calc.clock()
        priorities = manual_priorities or {}

        states = await self._repo.get_states(item_ids)
        items = [
            SchedulableItem(
                id=item_id,
                next_review=state.next_review,
                ease_factor=state.ease_factor,
                repetitions=state.repetitions,
                manual_priority=priorities.get(item_id),
            )
            for item_id, state in states.items()
        ]
        return build_review_queue(
            items, self._queue_capacity if capacity is None else capacity, now
        )
