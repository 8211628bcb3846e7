from datetime import date, datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from srs_engine.application.stats.metrics_calculator import (
    AnalyticsAggregator,
    daily_streaks,
    ease_factor_distribution,
    interval_distribution,
    mastery_summary,
)
from srs_engine.application.stats.service import ReviewStatsService
from srs_engine.domain.errors import InvalidHistory
from srs_engine.domain.models import ReviewState
from srs_engine.domain.stats.models import AnalyticsSummary, ReviewLogEntry

NOW = datetime(2026, 10, 19, tzinfo=timezone.utc)


@pytest.fixture
def aggregator():
    return AnalyticsAggregator()


@pytest.fixture
def mock_log_repo():
    return AsyncMock()


@pytest.fixture
def mock_state_repo():
    return AsyncMock()


def _state(ease=2.5, interval=1, reps=0):
    return ReviewState(interval=interval, ease_factor=ease, repetitions=reps, next_review=NOW)


def test_summary_retention_and_streak(aggregator):
    log = [
        ReviewLogEntry(quality=4, interval=1),
        ReviewLogEntry(quality=2, interval=1),
        ReviewLogEntry(quality=5, interval=1),
    ]

    summary = aggregator.summarize(log)

    assert summary.total_reviews == 3
    assert summary.retention_rate == 66.7
    assert summary.streak_count == 1
    assert summary.average_quality == pytest.approx(11 / 3)


def test_empty_log_is_all_zero(aggregator):
    summary = aggregator.summarize([])

    assert summary == AnalyticsSummary()
    assert summary.total_reviews == 0
    assert summary.retention_rate == 0
    assert summary.difficulty_distribution == {"easy": 0, "normal": 0, "hard": 0}


def test_difficulty_distribution_and_interval(aggregator):
    log = [ReviewLogEntry(quality=q, interval=i) for q, i in [(5, 10), (4, 6), (3, 3), (1, 1), (0, 1)]]

    summary = aggregator.summarize(log)

    assert summary.difficulty_distribution == {"easy": 2, "normal": 1, "hard": 2}
    assert summary.average_interval == 4.2
    assert summary.streak_count == 0


def test_streak_counts_whole_log_when_never_failed(aggregator):
    log = [ReviewLogEntry(quality=q, interval=1) for q in (3, 4, 5, 5)]
    assert aggregator.summarize(log).streak_count == 4


def test_average_duration_skips_missing(aggregator):
    log = [
        ReviewLogEntry(quality=4, interval=1, review_duration_seconds=10),
        ReviewLogEntry(quality=4, interval=1),
        ReviewLogEntry(quality=4, interval=1, review_duration_seconds=5),
    ]

    assert aggregator.summarize(log).average_review_duration == 7.5


def test_average_duration_is_unrounded_mean(aggregator):
    log = [
        ReviewLogEntry(quality=4, interval=1, review_duration_seconds=1.0),
        ReviewLogEntry(quality=4, interval=1, review_duration_seconds=1.0),
        ReviewLogEntry(quality=4, interval=1, review_duration_seconds=1.25),
    ]

    assert aggregator.summarize(log).average_review_duration == pytest.approx(3.25 / 3)


def test_retention_rate_ties_round_up(aggregator):
    log = [ReviewLogEntry(quality=4, interval=1)] + [
        ReviewLogEntry(quality=1, interval=1) for _ in range(15)
    ]

    # 1 of 16 passed: 6.25%
    assert aggregator.summarize(log).retention_rate == 6.3


def test_average_duration_zero_when_absent(aggregator):
    log = [ReviewLogEntry(quality=4, interval=1)]
    assert aggregator.summarize(log).average_review_duration == 0


def test_malformed_entries_are_skipped(aggregator):
    log = [
        ReviewLogEntry(quality=4, interval=1),
        ReviewLogEntry(quality=4, interval=-3),
        ReviewLogEntry(quality=9, interval=1),
        ReviewLogEntry(quality=3, interval=1, review_duration_seconds=-1),
        ReviewLogEntry(quality=2, interval=1),
    ]

    summary = aggregator.summarize(log)

    assert summary.total_reviews == 2
    assert summary.skipped_entries == 3
    assert summary.retention_rate == 50.0


def test_strict_mode_rejects_malformed_entry(aggregator):
    log = [ReviewLogEntry(quality=4, interval=1), ReviewLogEntry(quality=4, interval=-3)]

    with pytest.raises(InvalidHistory) as exc_info:
        aggregator.summarize(log, strict=True)

    assert exc_info.value.index == 1


def test_only_malformed_entries_yields_zeroed_summary(aggregator):
    summary = aggregator.summarize([ReviewLogEntry(quality=-1, interval=1)])
    assert summary.total_reviews == 0
    assert summary.skipped_entries == 1


def test_ease_factor_distribution():
    states = [_state(ease=e) for e in (1.3, 1.5, 2.0, 2.5, 2.5, 3.2)]

    buckets = ease_factor_distribution(states)

    assert [(b.label, b.count) for b in buckets] == [
        ("Very Hard", 2),
        ("Hard", 1),
        ("Normal", 0),
        ("Easy", 2),
        ("Very Easy", 1),
    ]
    assert buckets[0].percentage == 33.3


def test_ease_factor_distribution_empty():
    assert all(b.count == 0 and b.percentage == 0 for b in ease_factor_distribution([]))


def test_interval_distribution():
    states = [_state(interval=i) for i in (1, 2, 3, 10, 45, 365)]

    buckets = interval_distribution(states)

    assert [b.count for b in buckets] == [2, 1, 1, 1, 1]


def test_mastery_summary():
    states = [_state(reps=r) for r in (0, 0, 2, 5, 8)]

    mastery = mastery_summary(states)

    assert mastery.total_items == 5
    assert mastery.mastered_items == 2
    assert mastery.new_items == 2
    assert mastery.mastery_percentage == 40.0


def test_mastery_summary_empty():
    assert mastery_summary([]).mastery_percentage == 0.0


def test_daily_streaks():
    today = date(2026, 10, 19)
    days = [today - timedelta(days=d) for d in (0, 1, 2, 5, 6, 7, 8)]

    streaks = daily_streaks(days, today)

    assert streaks.current_streak == 3
    assert streaks.longest_streak == 4
    assert streaks.total_study_days == 7


def test_daily_streaks_broken_today():
    today = date(2026, 10, 19)
    streaks = daily_streaks([today - timedelta(days=1)], today)
    assert streaks.current_streak == 0
    assert streaks.longest_streak == 1


@pytest.mark.asyncio
async def test_stats_service_summary(mock_log_repo):
    service = ReviewStatsService(log_repo=mock_log_repo)
    mock_log_repo.get_review_log.return_value = [
        ReviewLogEntry(quality=5, interval=6),
        ReviewLogEntry(quality=4, interval=15),
    ]

    summary = await service.get_summary("user-1")

    assert summary.total_reviews == 2
    assert summary.retention_rate == 100.0
    mock_log_repo.get_review_log.assert_called_once_with("user-1")


@pytest.mark.asyncio
async def test_stats_service_mastery(mock_log_repo, mock_state_repo):
    service = ReviewStatsService(log_repo=mock_log_repo, state_repo=mock_state_repo)
    mock_state_repo.get_states.return_value = {1: _state(reps=6), 2: _state(reps=0)}

    mastery = await service.get_mastery([1, 2])

    assert mastery.mastered_items == 1
    assert mastery.new_items == 1
    mock_state_repo.get_states.assert_called_once_with([1, 2])


@pytest.mark.asyncio
async def test_stats_service_mastery_requires_state_repo(mock_log_repo):
    service = ReviewStatsService(log_repo=mock_log_repo)
    with pytest.raises(RuntimeError):
        await service.get_mastery([1])
