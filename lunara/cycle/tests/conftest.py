"""Shared fixtures for cycle calendar tests."""

from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from lunara.cycle.config_loader import CycleConfig, load_cycle_config
from lunara.cycle.projector import CycleModel

# Canonical dates: a known period start and a day inside that cycle
ANCHOR_DATE = date(2026, 1, 1)
TEST_DATE = date(2026, 1, 10)


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cycle_config() -> CycleConfig:
    """Load the real cycle config for tests."""
    return load_cycle_config()


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def default_model() -> CycleModel:
    """The 28-day cycle with a 5-day period and ovulation on day 14."""
    return CycleModel(cycle_length=28, period_length=5, ovulation_day=14)


@pytest.fixture
def long_model() -> CycleModel:
    """A 35-day cycle with a 7-day period."""
    return CycleModel.from_lengths(35, 7)


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------


@pytest.fixture
def client() -> TestClient:
    from lunara.main import create_app

    return TestClient(create_app())
