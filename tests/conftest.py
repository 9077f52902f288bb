"""Shared fixtures for the WOOF tracker tests."""

import pytest
from freezegun import freeze_time

from woof_tracker.config import AppConfig, FeedingConfig, PollConfig, SourceConfig, WindowConfig

WOOF_ENV_VARS = (
    "WOOF_SOURCE_URL",
    "WOOF_HTTP_TIMEOUT",
    "WOOF_CACHE_BUST",
    "WOOF_COMMENT_MARKER",
    "WOOF_RESET_HOUR",
    "WOOF_WINDOWS",
    "WOOF_TIMEZONE",
    "WOOF_POLL_INTERVAL",
)

SAMPLE_LOG = (
    "timestamp,rssi,beacon\n"
    "2024-01-01T07:30:00,-61,juney\n"
    "# sensor rebooted\n"
    "2024-01-01T07:45:00,-58,juney\n"
    "not-a-date,-70,juney\n"
    "2024-01-01T17:10:00,-60,juney\n"
)


@pytest.fixture
def windows():
    return [
        WindowConfig(name="breakfast", start_hour=7, end_hour=10),
        WindowConfig(name="dinner", start_hour=16, end_hour=20),
    ]


@pytest.fixture
def app_config(windows):
    return AppConfig(
        source=SourceConfig(url="https://example.test/beacon_events.csv"),
        feeding=FeedingConfig(reset_hour=2, windows=windows),
        poll=PollConfig(interval_seconds=120),
    )


@pytest.fixture
def sample_log():
    return SAMPLE_LOG


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every WOOF_* variable so load_config sees defaults."""
    for name in WOOF_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def frozen_clock():
    """Freeze the wall clock at 2024-01-01T08:00:00Z."""
    with freeze_time("2024-01-01T08:00:00Z") as frozen:
        yield frozen
