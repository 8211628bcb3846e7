"""
Engine Factory
Centralizes composing the calculator and its cache from configuration.
"""

from srs_engine.application.batch_processor import BatchProcessor
from srs_engine.application.calculation_cache import CalculationCache
from srs_engine.application.config import EngineConfig
from srs_engine.application.sm2_calculator import Sm2Calculator
from srs_engine.domain.clock import Clock, utc_now


def build_calculator(config: EngineConfig, clock: Clock = utc_now) -> Sm2Calculator:
    """
    Returns an Sm2Calculator owning a fresh cache sized from config,
    or no cache at all when caching is disabled.
    """
    cache = CalculationCache(config.cache_capacity) if config.cache_enabled else None
    return Sm2Calculator(cache=cache, clock=clock)


def build_batch_processor(config: EngineConfig, clock: Clock = utc_now) -> BatchProcessor:
    return BatchProcessor(build_calculator(config, clock=clock))
