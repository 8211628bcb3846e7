"""
Analytics over review history and review states.

This is a pure computation module with no I/O.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from srs_engine.domain.constants import (
    EASE_FACTOR_RANGES,
    INTERVAL_RANGES,
    MASTERED_REPETITIONS,
    MAX_QUALITY,
    MIN_QUALITY,
    PASSING_QUALITY,
)
from srs_engine.domain.errors import InvalidHistory
from srs_engine.domain.models import ReviewState
from srs_engine.domain.rounding import round_half_up
from srs_engine.domain.stats.models import (
    AnalyticsSummary,
    DistributionBucket,
    MasterySummary,
    ReviewLogEntry,
    StreakSummary,
)

logger = logging.getLogger(__name__)


class AnalyticsAggregator:
    """
    Summarizes review logs into retention analytics.

    Stateless and side-effect free.
    """

    def summarize(
        self, log: Sequence[ReviewLogEntry], strict: bool = False
    ) -> AnalyticsSummary:
        """
        Summarize a review log, oldest entry first.

        Malformed entries (quality outside 0-5, negative interval or
        duration) are skipped and counted in `skipped_entries`. With
        strict=True the first malformed entry raises InvalidHistory.
        """
        entries: list[ReviewLogEntry] = []
        skipped = 0
        for index, entry in enumerate(log):
            problem = self._find_problem(entry)
            if problem is None:
                entries.append(entry)
                continue
            if strict:
                raise InvalidHistory(index, problem)
            logger.warning(f"Skipping review log entry {index}: {problem}")
            skipped += 1

        if not entries:
            return AnalyticsSummary(skipped_entries=skipped)

        total = len(entries)
        passed = sum(1 for e in entries if e.quality >= PASSING_QUALITY)

        return AnalyticsSummary(
            total_reviews=total,
            average_quality=sum(e.quality for e in entries) / total,
            retention_rate=round_half_up(100 * passed / total, 1),
            average_interval=round_half_up(sum(e.interval for e in entries) / total, 1),
            difficulty_distribution=self._difficulty_distribution(entries),
            streak_count=self._trailing_streak(entries),
            average_review_duration=self._average_duration(entries),
            skipped_entries=skipped,
        )

    def _find_problem(self, entry: ReviewLogEntry) -> str | None:
        quality = entry.quality
        if isinstance(quality, bool) or not isinstance(quality, int):
            return f"quality {quality!r} is not an integer"
        if not MIN_QUALITY <= quality <= MAX_QUALITY:
            return f"quality {quality} outside [{MIN_QUALITY}, {MAX_QUALITY}]"
        if entry.interval < 0:
            return f"negative interval {entry.interval}"
        if entry.review_duration_seconds is not None and entry.review_duration_seconds < 0:
            return f"negative review duration {entry.review_duration_seconds}"
        return None

    def _difficulty_distribution(self, entries: list[ReviewLogEntry]) -> dict[str, int]:
        dist = {"easy": 0, "normal": 0, "hard": 0}
        for e in entries:
            if e.quality >= 4:
                dist["easy"] += 1
            elif e.quality >= PASSING_QUALITY:
                dist["normal"] += 1
            else:
                dist["hard"] += 1
        return dist

    def _trailing_streak(self, entries: list[ReviewLogEntry]) -> int:
        """Consecutive successful reviews counted back from the most recent one."""
        streak = 0
        for e in reversed(entries):
            if e.quality < PASSING_QUALITY:
                break
            streak += 1
        return streak

    def _average_duration(self, entries: list[ReviewLogEntry]) -> float:
        durations = [
            e.review_duration_seconds for e in entries if e.review_duration_seconds is not None
        ]
        if not durations:
            return 0.0
        return sum(durations) / len(durations)


def ease_factor_distribution(states: Iterable[ReviewState]) -> list[DistributionBucket]:
    """Count states per ease-factor band, with percentages of the banded total."""
    states = list(states)
    counts = [
        sum(1 for s in states if low <= s.ease_factor < high)
        for low, high, _ in EASE_FACTOR_RANGES
    ]
    total = sum(counts)
    return [
        DistributionBucket(
            label=label,
            count=count,
            percentage=round_half_up(100 * count / total, 1) if total > 0 else 0.0,
        )
        for (_, _, label), count in zip(EASE_FACTOR_RANGES, counts)
    ]


def interval_distribution(states: Iterable[ReviewState]) -> list[DistributionBucket]:
    """Count states per interval band. The last band includes its upper bound (365 days)."""
    states = list(states)
    buckets = []
    last = len(INTERVAL_RANGES) - 1
    for i, (low, high, label) in enumerate(INTERVAL_RANGES):
        if i == last:
            count = sum(1 for s in states if low <= s.interval <= high)
        else:
            count = sum(1 for s in states if low <= s.interval < high)
        buckets.append(DistributionBucket(label=label, count=count))
    return buckets


def mastery_summary(states: Iterable[ReviewState]) -> MasterySummary:
    states = list(states)
    total = len(states)
    mastered = sum(1 for s in states if s.repetitions >= MASTERED_REPETITIONS)
    new = sum(1 for s in states if s.repetitions == 0)
    return MasterySummary(
        total_items=total,
        mastered_items=mastered,
        new_items=new,
        mastery_percentage=round_half_up(100 * mastered / total, 1) if total > 0 else 0.0,
    )


def daily_streaks(review_days: Iterable[date], today: date) -> StreakSummary:
    """
    Study-day streaks.

    current_streak counts consecutive study days ending today (0 if there
    was no review today). longest_streak is the longest run of consecutive
    days anywhere in the history.
    """
    days = set(review_days)
    if not days:
        return StreakSummary(current_streak=0, longest_streak=0, total_study_days=0)

    current = 0
    check = today
    while check in days:
        current += 1
        check -= timedelta(days=1)

    longest = 0
    run = 0
    previous: date | None = None
    for day in sorted(days):
        if previous is not None and day - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day

    return StreakSummary(current_streak=current, longest_streak=longest, total_study_days=len(days))
