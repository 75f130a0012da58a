"""Shared test fixtures and configuration.

Sets up fake environment variables so src.config doesn't sys.exit(),
and provides a tracker context backed by a temp directory.
"""

import os

# Patch env vars BEFORE any src imports
os.environ.setdefault("BOT_TOKEN", "fake-token-for-tests")
os.environ.setdefault("CHAT_ID", "")
os.environ.setdefault("MATCH_DATE", "2026-03-28")
os.environ.setdefault("ESTIMATE_BUDGET", "5000")
os.environ.setdefault("TIMEZONE", "UTC")

from datetime import date, datetime, timezone

import pytest


@pytest.fixture
def store(tmp_path):
    """Return a StateStore backed by a temp directory."""
    from src.data.store import StateStore
    return StateStore(data_dir=tmp_path)


@pytest.fixture
def fixed_now():
    """Fixed clock: 94 full days (plus the rest of the day) before the default match date."""
    return datetime(2025, 12, 23, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def tracker(store, fixed_now):
    """Return a TrackerContext with a fixed clock and a $5,000 target."""
    from src.core.tracker import TrackerContext
    return TrackerContext(
        store=store,
        target_date=date(2026, 3, 28),
        budget_target=5000,
        tz=timezone.utc,
        clock=lambda: fixed_now,
    )
