"""Shared fixtures for identifier tests."""
from datetime import date

import pytest


@pytest.fixture(autouse=True)
def fast_retries(settings):
    """No sleeping between allocation attempts in tests."""
    settings.UID_BACKOFF_SECONDS = 0
    settings.UID_MAX_ATTEMPTS = 5
    settings.UID_ALLOCATION_STRATEGY = 'counter'
    return settings


@pytest.fixture
def scan_strategy(settings):
    settings.UID_ALLOCATION_STRATEGY = 'scan'
    return settings


@pytest.fixture
def november_2025():
    return date(2025, 11, 7)
