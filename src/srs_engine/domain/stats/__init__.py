# Domain Stats Package
from .models import (
    AnalyticsSummary,
    DistributionBucket,
    MasterySummary,
    ReviewLogEntry,
    StreakSummary,
)

__all__ = [
    "ReviewLogEntry",
    "AnalyticsSummary",
    "DistributionBucket",
    "MasterySummary",
    "StreakSummary",
]
