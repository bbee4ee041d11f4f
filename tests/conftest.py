"""Shared pytest fixtures for geminipulse tests."""

import random

import pytest
from loguru import logger

from geminipulse.config import Settings


@pytest.fixture(autouse=True)
def disable_loguru():
    """Disable loguru output during tests for cleaner output."""
    logger.disable("geminipulse")
    yield
    logger.enable("geminipulse")


@pytest.fixture
def rng():
    """Deterministic random source."""
    return random.Random(1234)


@pytest.fixture
def test_settings():
    """Settings with no API key and no .env influence."""
    return Settings(_env_file=None, api_key="", default_symbol="NVDA")
