"""Shared pytest fixtures for the age_diff test suite.

Fixtures defined here are available to all test modules (unit and
integration) without any import.

Every arithmetic test runs against fixed instants; only the HTTP tests that
explicitly exercise "now" read the real clock, and those pin it through the
``clock`` argument of ``create_app``.
"""

import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from age_diff.api import create_app
from age_diff.config import Settings


# ---------------------------------------------------------------------------
# Instant fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fixed_now() -> datetime.datetime:
    """The reference instant used by the HTTP tests: 24 Feb 2026, 10:30:00."""
    return datetime.datetime(2026, 2, 24, 10, 30, 0)


@pytest.fixture
def leap_day_birth() -> datetime.datetime:
    """Midnight of 29 February 2000 (2000 is divisible by 400)."""
    return datetime.datetime(2000, 2, 29)


# ---------------------------------------------------------------------------
# Application fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def app_settings(tmp_path: Path) -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        output_dir=tmp_path / "output",
        rate_limit_requests=1000,
        rate_limit_window_seconds=60,
    )


@pytest.fixture
def client(app_settings: Settings, fixed_now: datetime.datetime) -> TestClient:
    """A TestClient whose server clock is pinned to ``fixed_now``."""
    app = create_app(app_settings, clock=lambda: fixed_now)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def summary_path(app_settings: Settings) -> Path:
    return app_settings.output_dir / "age_summary.txt"
