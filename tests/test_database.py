"""
Tests for the SQLite snapshot backend.

Usage:
    pytest tests/test_database.py -v
"""
import sqlite3
import pytest

from activity_engine import ActivityService, GoalConfig, PersistenceError, SampleStore
from server.activity_api.database import SqliteSnapshotBackend


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "nested" / "activity.db")


@pytest.fixture
def sqlite_backend(db_path):
    return SqliteSnapshotBackend(db_path)


class TestSqliteSnapshotBackend:
    """Test snapshot round trips through SQLite."""

    def test_creates_schema_and_directory(self, db_path, sqlite_backend):
        """Construction creates the parent directory and both tables."""
        conn = sqlite3.connect(db_path)
        tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
        conn.close()

        assert {"samples", "goals"} <= tables

    def test_empty_database(self, sqlite_backend):
        """A fresh database has no samples and no goals."""
        assert sqlite_backend.load_samples() == []
        assert sqlite_backend.load_goals() is None

    def test_samples_round_trip_in_order(self, sqlite_backend, make_sample):
        """Samples come back equal and in insertion order."""
        samples = [
            make_sample(300, 15.5, end="2026-10-19T12:00:00Z", device_id="watch"),
            make_sample(100, 5.0, end="2026-10-19T08:00:00Z"),
            make_sample(200, 10.25, end="2026-10-19T10:00:00+02:00"),
        ]
        sqlite_backend.save_samples(samples)

        assert sqlite_backend.load_samples() == samples

    def test_save_replaces_snapshot(self, sqlite_backend, make_sample):
        """Each save overwrites the previous snapshot."""
        sqlite_backend.save_samples([make_sample(1), make_sample(2)])
        sqlite_backend.save_samples([make_sample(3)])

        assert [s.steps for s in sqlite_backend.load_samples()] == [3]

    def test_goals_upsert(self, sqlite_backend, db_path):
        """Goals are a single row updated in place."""
        sqlite_backend.save_goals(GoalConfig(steps=8000, calories=400.0))
        sqlite_backend.save_goals(GoalConfig(steps=9000, calories=450.5))

        assert sqlite_backend.load_goals() == GoalConfig(steps=9000, calories=450.5)
        conn = sqlite3.connect(db_path)
        assert conn.execute("SELECT COUNT(*) FROM goals").fetchone()[0] == 1
        conn.close()

    def test_failed_write_keeps_previous_snapshot(self, sqlite_backend, db_path, make_sample):
        """A write that fails mid-transaction is rolled back."""
        sqlite_backend.save_samples([make_sample(100)])

        conn = sqlite3.connect(db_path)
        conn.execute(
            """
            CREATE TRIGGER reject_negative BEFORE INSERT ON samples
            WHEN NEW.steps < 0
            BEGIN SELECT RAISE(ABORT, 'negative steps'); END
            """
        )
        conn.commit()
        conn.close()

        with pytest.raises(PersistenceError):
            sqlite_backend.save_samples([make_sample(200), make_sample(-1)])

        assert [s.steps for s in sqlite_backend.load_samples()] == [100]

    def test_integer_overflow_is_persistence_error(self, sqlite_backend, make_sample):
        """Values beyond SQLite's INTEGER range fail as PersistenceError and roll back."""
        sqlite_backend.save_samples([make_sample(100)])

        with pytest.raises(PersistenceError):
            sqlite_backend.save_samples([make_sample(200), make_sample(2 ** 63)])
        with pytest.raises(PersistenceError):
            sqlite_backend.save_goals(GoalConfig(steps=2 ** 63, calories=400.0))

        assert [s.steps for s in sqlite_backend.load_samples()] == [100]
        assert sqlite_backend.load_goals() is None

    def test_unreadable_tables_load_as_empty(self, sqlite_backend, db_path, make_sample):
        """Read failures fall back to empty state; write failures raise."""
        conn = sqlite3.connect(db_path)
        conn.execute("DROP TABLE samples")
        conn.execute("DROP TABLE goals")
        conn.commit()
        conn.close()

        assert sqlite_backend.load_samples() == []
        assert sqlite_backend.load_goals() is None
        with pytest.raises(PersistenceError):
            sqlite_backend.save_samples([make_sample(1)])
        with pytest.raises(PersistenceError):
            sqlite_backend.save_goals(GoalConfig(steps=8000, calories=400.0))


class TestServiceOverSqlite:
    """Test that state survives a restart."""

    def test_restart_restores_samples_and_dedup(self, db_path, clock, make_payload):
        """A new store over the same file keeps order, ids and dedup keys."""
        first = SampleStore(SqliteSnapshotBackend(db_path), clock=clock)
        created = first.ingest(make_payload(steps=1000))
        first.ingest(make_payload(steps=500, start="2026-10-19T10:00:00Z", end="2026-10-19T11:00:00Z"))

        second = SampleStore(SqliteSnapshotBackend(db_path), clock=clock)
        assert second.load() == 2

        result = second.ingest(make_payload(steps=1500))
        assert result.status == "updated"
        assert result.id == created.id
        assert [s.steps for s in second.snapshot()] == [1500, 500]

    def test_restart_restores_goals(self, db_path, clock):
        """Saved goals replace the defaults after a restart."""
        first = ActivityService(SqliteSnapshotBackend(db_path), clock=clock)
        first.load()
        first.set_goals(7500, 350)

        second = ActivityService(SqliteSnapshotBackend(db_path), clock=clock)
        second.load()
        assert second.get_goals() == GoalConfig(steps=7500, calories=350.0)
