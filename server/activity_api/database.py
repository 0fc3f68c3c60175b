"""SQLite snapshot storage for activity samples and goals."""
import os
import sqlite3
from contextlib import contextmanager
from functools import lru_cache
from typing import Generator, List, Optional, Sequence
import logging

from activity_engine import (
    ActivityService,
    DeviceInfo,
    GoalConfig,
    PersistenceError,
    Sample,
    validate_goals,
)
from activity_engine.clock import iso, utc_now

from .config import get_settings

log = logging.getLogger(__name__)

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS samples (
        position INTEGER PRIMARY KEY,
        id TEXT NOT NULL,
        received_at TEXT NOT NULL,
        device_id TEXT NOT NULL,
        model TEXT NOT NULL,
        os_version TEXT NOT NULL,
        steps INTEGER NOT NULL,
        distance REAL NOT NULL,
        calories REAL NOT NULL,
        start_time TEXT NOT NULL,
        end_time TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS goals (
        id INTEGER PRIMARY KEY CHECK (id = 1),
        steps INTEGER NOT NULL,
        calories REAL NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
)


class SqliteSnapshotBackend:
    """
    Snapshot backend on a single SQLite file.

    Each save rewrites its whole table inside one transaction, so a failed
    or interrupted write leaves the previous snapshot in place.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        directory = os.path.dirname(os.path.abspath(db_path))
        os.makedirs(directory, exist_ok=True)
        with self._connect() as conn:
            for ddl in SCHEMA:
                conn.execute(ddl)

    @contextmanager
    def _connect(self) -> Generator[sqlite3.Connection, None, None]:
        """Open a connection whose block commits on success and rolls back on error."""
        try:
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot open {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        except (sqlite3.Error, OverflowError) as e:
            # OverflowError: int values beyond SQLite's 64-bit INTEGER range
            raise PersistenceError(f"SQLite error on {self.db_path}: {e}") from e
        finally:
            conn.close()

    def load_samples(self) -> List[Sample]:
        try:
            with self._connect() as conn:
                rows = conn.execute("SELECT * FROM samples ORDER BY position").fetchall()
        except PersistenceError as e:
            log.warning(f"[DB] Unable to read samples, starting empty: {e}")
            return []
        return [_row_to_sample(row) for row in rows]

    def save_samples(self, samples: Sequence[Sample]) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM samples")
            conn.executemany(
                """
                INSERT INTO samples (
                    position, id, received_at, device_id, model, os_version,
                    steps, distance, calories, start_time, end_time
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        position,
                        s.id,
                        s.received_at,
                        s.device.device_id,
                        s.device.model,
                        s.device.os_version,
                        s.steps,
                        s.distance,
                        s.calories,
                        s.start,
                        s.end,
                    )
                    for position, s in enumerate(samples)
                ],
            )
        log.debug(f"[DB] Wrote snapshot of {len(samples)} samples")

    def load_goals(self) -> Optional[GoalConfig]:
        try:
            with self._connect() as conn:
                row = conn.execute("SELECT steps, calories FROM goals WHERE id = 1").fetchone()
        except PersistenceError as e:
            log.warning(f"[DB] Unable to read goals, using defaults: {e}")
            return None
        if row is None:
            return None
        return GoalConfig(steps=int(row["steps"]), calories=float(row["calories"]))

    def save_goals(self, goal: GoalConfig) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO goals (id, steps, calories, updated_at)
                VALUES (1, :steps, :calories, :updated_at)
                ON CONFLICT(id) DO UPDATE SET
                  steps=excluded.steps,
                  calories=excluded.calories,
                  updated_at=excluded.updated_at
                """,
                {"steps": goal.steps, "calories": goal.calories, "updated_at": iso(utc_now())},
            )


def _row_to_sample(row) -> Sample:
    """Convert SQLite row to Sample."""
    return Sample(
        id=row["id"],
        received_at=row["received_at"],
        device=DeviceInfo(
            device_id=row["device_id"],
            model=row["model"],
            os_version=row["os_version"],
        ),
        steps=int(row["steps"]),
        distance=float(row["distance"]),
        calories=float(row["calories"]),
        start=row["start_time"],
        end=row["end_time"],
    )


@lru_cache
def get_activity_service() -> ActivityService:
    """Build the process-wide service from settings and load persisted state."""
    settings = get_settings()
    backend = SqliteSnapshotBackend(settings.database_path)
    service = ActivityService(
        backend,
        default_goals=validate_goals(settings.default_step_goal, settings.default_calorie_goal),
    )
    service.load()
    log.info(f"[DB] Activity store ready at {settings.database_path}")
    return service
