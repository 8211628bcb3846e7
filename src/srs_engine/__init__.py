"""srs-engine: spaced-repetition scheduling core."""

from srs_engine.consts import VERSION

__version__ = VERSION
