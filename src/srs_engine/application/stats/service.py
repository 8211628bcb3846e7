"""
Review Stats Service: application layer orchestrator.

Coordinates fetching history and states from the repositories and
summarizing them with the analytics aggregator.
"""

import logging
from typing import Any

from srs_engine.domain.ports import ReviewLogRepository, ReviewStateRepository
from srs_engine.domain.stats.models import AnalyticsSummary, MasterySummary

from .metrics_calculator import AnalyticsAggregator, mastery_summary

logger = logging.getLogger(__name__)


class ReviewStatsService:
    """
    Application service for review analytics.

    Follows Dependency Inversion: depends on repository abstractions,
    not concrete storage implementations.
    """

    def __init__(
        self,
        log_repo: ReviewLogRepository,
        state_repo: ReviewStateRepository | None = None,
        aggregator: AnalyticsAggregator | None = None,
    ):
        """
        Args:
            log_repo: The repository (port) for review history.
            state_repo: Optional repository for current review states.
            aggregator: Optional custom aggregator; uses default if not provided.
        """
        self._logs = log_repo
        self._states = state_repo
        self._agg = aggregator or AnalyticsAggregator()

    async def get_summary(self, user_id: Any, strict: bool = False) -> AnalyticsSummary:
        """Fetch a user's review history and summarize it."""
        log = await self._logs.get_review_log(user_id)
        summary = self._agg.summarize(log, strict=strict)
        if summary.skipped_entries:
            logger.warning(
                f"Skipped {summary.skipped_entries} malformed log entries for user {user_id}"
            )
        return summary

    async def get_mastery(self, item_ids: list[Any]) -> MasterySummary:
        """Mastery breakdown of the given items."""
        if self._states is None:
            raise RuntimeError("ReviewStatsService was created without a state repository")
        if not item_ids:
            return mastery_summary([])
        states = await self._states.get_states(item_ids)
        return mastery_summary(states.values())
