# Application Stats Package
from .metrics_calculator import (
    AnalyticsAggregator,
    daily_streaks,
    ease_factor_distribution,
    interval_distribution,
    mastery_summary,
)
from .service import ReviewStatsService

__all__ = [
    "AnalyticsAggregator",
    "ReviewStatsService",
    "daily_streaks",
    "ease_factor_distribution",
    "interval_distribution",
    "mastery_summary",
]
