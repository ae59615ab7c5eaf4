"""Shared fixtures for the AskCart test suite.

Every test gets its own SQLite file; coroutines run under asyncio.run,
so each scenario opens and closes its database inside one event loop.
"""

import pytest

from tests.fakes import make_settings


@pytest.fixture
def db_url(tmp_path):
    """SQLite database file private to the test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'askcart.db'}"


@pytest.fixture
def settings(db_url):
    return make_settings(db_url, reasoning_timeout=2.0)
