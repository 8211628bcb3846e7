"""
Batch processor: runs the SM-2 calculator over many independent items.

Batches are all-or-nothing. An invalid rating anywhere in the batch raises
InvalidRating (tagged with the offending item id) and no partial result is
returned. Callers that need cancellation should chunk the input themselves.
"""

import logging
import time
from collections.abc import Iterable
from datetime import datetime

from srs_engine.domain.models import BatchItem, BatchItemResult, BatchResult

from .sm2_calculator import Sm2Calculator, validate_quality

logger = logging.getLogger(__name__)


class BatchProcessor:
    def __init__(self, calculator: Sm2Calculator | None = None):
        self._calc = calculator or Sm2Calculator()

    @property
    def calculator(self) -> Sm2Calculator:
        return self._calc

    def compute_batch(
        self, items: Iterable[BatchItem], now: datetime | None = None
    ) -> BatchResult:
        """
        Compute the next schedule for every item, preserving input order.

        All items share one reference time so their next_review values are
        comparable.

        Raises:
            InvalidRating: If any item carries a rating outside [0, 5].
        """
        items = list(items)
        # Reject the whole batch before computing anything.
        for item in items:
            validate_quality(item.quality, item.id)

        if now is None:
            now = self._calc.clock()

        start = time.perf_counter()
        results: list[BatchItemResult] = []
        for item in items:
            result = self._calc.compute(
                item.quality, item.repetitions, item.interval, item.ease_factor, now=now
            )
            results.append(BatchItemResult(id=item.id, result=result))
        duration_ms = (time.perf_counter() - start) * 1000.0

        logger.info(f"Computed SM-2 batch of {len(results)} items in {duration_ms:.2f} ms")
        return BatchResult(items=results, duration_ms=duration_ms)
