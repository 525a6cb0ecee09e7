"""Pytest configuration and shared fixtures for habitledger tests.

Every test gets its own in-memory SQLite database. Engine-level tests work
against a ``TrackerStore`` bound to one open session; service-level tests go
through ``HabitTracker`` and its per-call transactions.
"""

from __future__ import annotations

import logging
from typing import Optional

import pytest

from habitledger.config import TestConfig
from habitledger.infra.database import create_db_engine, create_session_factory, init_database
from habitledger.infra.repositories.store import TrackerStore
from habitledger.logging_config import ROOT_LOGGER_NAME
from habitledger.models import Achievement, Habit
from habitledger.services.dates import shift_date
from habitledger.services.habits import HabitTracker

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def test_config(tmp_path) -> TestConfig:
    return TestConfig(data_dir=tmp_path)


@pytest.fixture(scope="function")
def db_engine(test_config):
    """Create an isolated in-memory database with all tables."""
    engine = create_db_engine(test_config)
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Factory of transactional session scopes, as the service layer expects."""
    return create_session_factory(db_engine)


@pytest.fixture(scope="function")
def tracker(session_factory) -> HabitTracker:
    return HabitTracker(session_factory)


@pytest.fixture(scope="function")
def store(session_factory):
    """A TrackerStore over one session, committed when the test ends."""
    with session_factory() as session:
        yield TrackerStore(session)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(store):
    """Factory for persisted habits.

    Returns:
        Callable: Function that creates and flushes Habit rows
    """
    counter = {"n": 0}

    def _create_habit(
        name: str = "Test Habit",
        created_date: str = "2024-01-01",
        deleted_date: Optional[str] = None,
        habit_id: Optional[str] = None,
    ) -> Habit:
        counter["n"] += 1
        habit = Habit(
            id=habit_id or f"h{counter['n']:03d}",
            name=name,
            created_date=created_date,
            deleted=deleted_date is not None,
            deleted_date=deleted_date,
            sort_order=store.habits.next_sort_order(),
        )
        return store.habits.create(habit)

    return _create_habit


@pytest.fixture
def complete(store):
    """Record completions for a habit on a run of consecutive days.

    ``complete(habit, "2024-01-01", days=7)`` marks Jan 1 through Jan 7.
    """

    def _complete(habit: Habit, start: str, days: int = 1) -> None:
        for offset in range(days):
            store.completions.add(shift_date(start, offset), habit.id)

    return _complete


@pytest.fixture
def ledger(store):
    """Current achievement rows as a set of (type, habit_id, earned_date)."""

    def _ledger() -> set[tuple[str, Optional[str], str]]:
        return {(row.type, row.habit_id, row.earned_date) for row in store.achievements.list_all()}

    return _ledger


@pytest.fixture
def committed_achievements(session_factory):
    """Achievements as seen by a fresh transaction, i.e. only committed rows."""

    def _read() -> set[tuple[str, Optional[str], str]]:
        with session_factory() as session:
            rows: list[Achievement] = TrackerStore(session).achievements.list_all()
            return {(row.type, row.habit_id, row.earned_date) for row in rows}

    return _read


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers installed by setup_logging so they don't leak across tests."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
