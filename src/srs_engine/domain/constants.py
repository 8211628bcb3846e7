"""Centralized constants for the scheduling engine.

All magic numbers of the SM-2 policy live here so every layer
imports from a single source of truth.
"""

# ---------- Ratings ----------
MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3

# ---------- Review state defaults ----------
DEFAULT_INTERVAL = 1
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
MIN_INTERVAL = 1
MAX_INTERVAL = 365  # days

# ---------- SM-2 policy ----------
FAILURE_BASE_PENALTY = 0.15
FAILURE_STEP_PENALTY = 0.05
SECOND_INTERVAL_GOOD = 6  # quality >= 4
SECOND_INTERVAL_HARD = 4  # quality == 3
QUALITY_BONUS = {5: 0.15, 4: 0.10, 3: 0.05}
EASY_INTERVAL_MULTIPLIER = 1.1
HARD_INTERVAL_MULTIPLIER = 0.9
CONFIDENCE_PER_REPETITION = 0.1
EASE_DECIMALS = 2

# ---------- Cache ----------
DEFAULT_CACHE_CAPACITY = 1000

# ---------- Queue Builder ----------
DEFAULT_QUEUE_CAPACITY = 20

# ---------- Analytics ----------
MASTERED_REPETITIONS = 5
EASE_FACTOR_RANGES = [
    (1.3, 1.7, "Very Hard"),
    (1.7, 2.1, "Hard"),
    (2.1, 2.5, "Normal"),
    (2.5, 3.0, "Easy"),
    (3.0, 5.0, "Very Easy"),
]
INTERVAL_RANGES = [
    (1, 3, "1-3 days"),
    (3, 7, "3-7 days"),
    (7, 30, "1-4 weeks"),
    (30, 90, "1-3 months"),
    (90, 365, "3-12 months"),
]
