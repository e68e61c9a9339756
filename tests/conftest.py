"""Shared pytest fixtures for GridGoal tests."""

import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from gridgoal.database.db import configure_engine, init_db
from gridgoal.timer.engine import TimerEngine
from gridgoal.timer.snapshot import SnapshotStore

from helpers import FakeClock, FailingSink, RecordingSink


@pytest.fixture(scope="session")
def qapp():
    """A single Qt application instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(qapp, clock):
    """Fresh TimerEngine writing straight to the DB, no snapshot."""
    return TimerEngine(parent=None, clock=clock, deferred_emission=False)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def engine_sink(qapp, clock, sink):
    """Fresh TimerEngine logging into an in-memory recording sink."""
    return TimerEngine(parent=None, clock=clock, sink=sink, deferred_emission=False)


@pytest.fixture
def engine_failing(qapp, clock):
    """Fresh TimerEngine whose sink raises on every call."""
    return TimerEngine(parent=None, clock=clock, sink=FailingSink(), deferred_emission=False)


@pytest.fixture
def engine_no_db(qapp, clock):
    """Fresh TimerEngine with no storage at all (pure state-machine tests)."""
    return TimerEngine(parent=None, clock=clock, db_enabled=False)


@pytest.fixture
def store(tmp_path):
    return SnapshotStore(tmp_path / "timer-state.json")
