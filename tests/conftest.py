"""
Pytest configuration: isolate the logger and config singletons per test.
"""

import logging

import pytest

from streamta.config.config import reset_config
from streamta.utils import logger as logger_module


@pytest.fixture(autouse=True)
def _isolate_singletons():
    yield
    reset_config()
    logging.getLogger("streamta").handlers.clear()
    logger_module.IndicatorLogger._instance = None
    logger_module.IndicatorLogger._initialized = False
    logger_module._logger = None


@pytest.fixture
def prices():
    from tests.fixtures import random_walk_prices
    return random_walk_prices()


@pytest.fixture
def bars():
    from tests.fixtures import random_walk_bars
    return random_walk_bars()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run in an empty directory with no STREAMTA_* variables set."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "STREAMTA_DECIMAL_PRECISION",
        "STREAMTA_DISPLAY_PLACES",
        "STREAMTA_LOG_LEVEL",
        "STREAMTA_LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    return monkeypatch
