"""
Ports (interfaces) for review-state persistence and history retrieval.

These define the contract that the storage layer must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Any

from .models import ReviewState
from .stats.models import ReviewLogEntry


class ReviewStateRepository(ABC):
    """Port for loading and saving per-item review state."""

    @abstractmethod
    async def get_states(self, item_ids: list[Any]) -> dict[Any, ReviewState]:
        """
        Fetch the current review state of the given items.

        Args:
            item_ids: Identifiers of cards or collocations.

        Returns:
            Mapping of item id to ReviewState. Unknown ids are omitted.
        """
        pass

    @abstractmethod
    async def save_state(self, item_id: Any, state: ReviewState) -> None:
        """Persist the new review state of one item."""
        pass


class ReviewLogRepository(ABC):
    """Port for reading the append-only review history."""

    @abstractmethod
    async def get_review_log(self, user_id: Any) -> list[ReviewLogEntry]:
        """
        Fetch the review history of a user.

        Returns:
            List of ReviewLogEntry objects, oldest first.
        """
        pass
