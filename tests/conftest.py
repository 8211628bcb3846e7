from datetime import datetime, timezone

import pytest

from srs_engine.application.calculation_cache import CalculationCache
from srs_engine.application.sm2_calculator import Sm2Calculator


@pytest.fixture
def now():
    """Fixed reference time so schedules are deterministic."""
    return datetime(2026, 10, 19, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def cache():
    return CalculationCache(capacity=1000)


@pytest.fixture
def calculator(now):
    return Sm2Calculator(clock=lambda: now)


@pytest.fixture
def cached_calculator(now, cache):
    return Sm2Calculator(cache=cache, clock=lambda: now)


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    return home
