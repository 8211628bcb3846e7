import pytest
from pydantic import ValidationError

from srs_engine.application.config import EngineConfig, resolve_config
from srs_engine.application.factory import build_batch_processor, build_calculator


def test_defaults(mock_home):
    config = resolve_config()

    assert config.cache_enabled is True
    assert config.cache_capacity == 1000
    assert config.queue_capacity == 20
    assert config.log_level == "INFO"


def test_env_overrides(mock_home, monkeypatch):
    monkeypatch.setenv("SRS_CACHE_CAPACITY", "50")
    monkeypatch.setenv("SRS_LOG_LEVEL", "debug")

    config = resolve_config()

    assert config.cache_capacity == 50
    assert config.log_level == "DEBUG"


def test_toml_file_is_read(mock_home, monkeypatch):
    cfg = mock_home / ".config/srs-engine/config.toml"
    cfg.parent.mkdir(parents=True)
    cfg.write_text("queue_capacity = 5\ncache_enabled = false\n")

    config = resolve_config()

    assert config.queue_capacity == 5
    assert config.cache_enabled is False


def test_env_beats_toml(mock_home, monkeypatch):
    cfg = mock_home / ".srs-engine.toml"
    cfg.write_text("queue_capacity = 5\n")
    monkeypatch.setenv("SRS_QUEUE_CAPACITY", "7")

    assert resolve_config().queue_capacity == 7


def test_cli_overrides_win_and_none_is_ignored(mock_home, monkeypatch):
    monkeypatch.setenv("SRS_QUEUE_CAPACITY", "7")

    config = resolve_config({"queue_capacity": 3, "cache_capacity": None})

    assert config.queue_capacity == 3
    assert config.cache_capacity == 1000


def test_negative_capacity_rejected(mock_home):
    with pytest.raises(ValidationError):
        EngineConfig(cache_capacity=-1)


def test_factory_builds_cache_from_config(mock_home):
    calc = build_calculator(EngineConfig(cache_capacity=10))
    assert calc.cache is not None
    assert calc.cache.capacity == 10


def test_factory_without_cache(mock_home):
    processor = build_batch_processor(EngineConfig(cache_enabled=False))
    assert processor.calculator.cache is None
