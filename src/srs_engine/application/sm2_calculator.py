"""
SM-2 calculator.

Given the prior scheduling state of an item and a 0-5 quality rating,
derives the next interval, ease factor and repetition count, plus a
confidence score and a difficulty class.

This is a pure computation module with no I/O. The only state it may
touch is an explicitly injected CalculationCache.
"""

import logging
from dataclasses import replace
from datetime import datetime, timedelta

from srs_engine.domain.clock import Clock, utc_now
from srs_engine.domain.constants import (
    CONFIDENCE_PER_REPETITION,
    EASE_DECIMALS,
    EASY_INTERVAL_MULTIPLIER,
    FAILURE_BASE_PENALTY,
    FAILURE_STEP_PENALTY,
    HARD_INTERVAL_MULTIPLIER,
    MAX_INTERVAL,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    MIN_INTERVAL,
    MIN_QUALITY,
    PASSING_QUALITY,
    QUALITY_BONUS,
    SECOND_INTERVAL_GOOD,
    SECOND_INTERVAL_HARD,
)
from srs_engine.domain.errors import InvalidRating
from srs_engine.domain.models import CalculationResult, DifficultyClass, ReviewState
from srs_engine.domain.rounding import round_half_up

from .calculation_cache import CalculationCache

logger = logging.getLogger(__name__)


def validate_quality(quality: object, item_id: object | None = None) -> int:
    """Return `quality` if it is an integer rating on the 0-5 scale, else raise InvalidRating."""
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidRating(quality, item_id)
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise InvalidRating(quality, item_id)
    return quality


def _transform(
    quality: int, repetitions: int, interval: int, ease_factor: float
) -> CalculationResult:
    """Time-independent part of the SM-2 step. Result has next_review=None."""
    if quality < PASSING_QUALITY:
        penalty = FAILURE_BASE_PENALTY + (PASSING_QUALITY - quality) * FAILURE_STEP_PENALTY
        new_interval = 1
        new_repetitions = 0
        new_ease = ease_factor - penalty
        difficulty = DifficultyClass.HARD
        confidence = quality / MAX_QUALITY
    else:
        new_repetitions = repetitions + 1
        new_ease = ease_factor

        if repetitions == 0:
            new_interval = 1
        elif repetitions == 1:
            new_interval = SECOND_INTERVAL_GOOD if quality >= 4 else SECOND_INTERVAL_HARD
        else:
            new_interval = round_half_up(interval * ease_factor)
            miss = MAX_QUALITY - quality
            new_ease += QUALITY_BONUS[quality] - miss * (0.08 + miss * 0.02)

        if quality == MAX_QUALITY:
            new_interval = round_half_up(new_interval * EASY_INTERVAL_MULTIPLIER)
            difficulty = DifficultyClass.EASY
        elif quality == PASSING_QUALITY:
            new_interval = round_half_up(new_interval * HARD_INTERVAL_MULTIPLIER)
            difficulty = DifficultyClass.HARD
        else:
            difficulty = DifficultyClass.NORMAL

        confidence = min(1.0, quality / MAX_QUALITY + new_repetitions * CONFIDENCE_PER_REPETITION)

    # Clamp last
    new_ease = round(max(MIN_EASE_FACTOR, new_ease), EASE_DECIMALS)
    new_interval = min(MAX_INTERVAL, max(MIN_INTERVAL, new_interval))

    return CalculationResult(
        interval=new_interval,
        repetitions=new_repetitions,
        ease_factor=new_ease,
        next_review=None,
        confidence=confidence,
        difficulty_class=difficulty,
    )


class Sm2Calculator:
    """
    SM-2 scheduler with an optional, explicitly owned result cache.

    Args:
        cache: Memo table shared by whoever composes the calculator.
            None disables caching.
        clock: Time source used when no explicit `now` is passed.
    """

    def __init__(self, cache: CalculationCache | None = None, clock: Clock = utc_now):
        self._cache = cache
        self._clock = clock

    @property
    def cache(self) -> CalculationCache | None:
        return self._cache

    @property
    def clock(self) -> Clock:
        return self._clock

    def compute(
        self,
        quality: int,
        repetitions: int,
        interval: int,
        ease_factor: float,
        now: datetime | None = None,
    ) -> CalculationResult:
        """
        Compute the next schedule for one item.

        Args:
            quality: Recall quality (0-5)
                0 - Complete blackout
                1 - Incorrect response, but upon seeing correct answer, remembered
                2 - Incorrect response, but correct answer seemed easy to recall
                3 - Correct response with serious difficulty
                4 - Correct response after hesitation
                5 - Perfect response
            repetitions: Consecutive successful reviews before this one
            interval: Current interval in days
            ease_factor: Current ease factor
            now: Reference time for next_review; defaults to the clock

        Returns:
            CalculationResult with next_review = now + interval days

        Raises:
            InvalidRating: If quality is not an integer in [0, 5].
        """
        validate_quality(quality)
        if now is None:
            now = self._clock()

        if self._cache is not None:
            cached = self._cache.lookup(quality, repetitions, interval, ease_factor, now)
            if cached is not None:
                logger.debug(f"SM-2 cache hit for q={quality} reps={repetitions}")
                return cached

        result = _transform(quality, repetitions, interval, ease_factor)
        if self._cache is not None:
            key = CalculationCache.make_key(quality, repetitions, interval, ease_factor)
            self._cache.store(key, result)

        return replace(result, next_review=now + timedelta(days=result.interval))

    def apply(self, state: ReviewState, quality: int, now: datetime | None = None) -> ReviewState:
        """Return the ReviewState that follows `state` after a review rated `quality`."""
        result = self.compute(
            quality, state.repetitions, state.interval, state.ease_factor, now=now
        )
        return result.to_state()


def compute_sm2(
    quality: int,
    repetitions: int,
    interval: int,
    ease_factor: float,
    now: datetime | None = None,
) -> CalculationResult:
    """Uncached convenience wrapper around Sm2Calculator.compute."""
    return Sm2Calculator().compute(quality, repetitions, interval, ease_factor, now=now)
