"""
Pytest fixtures for Step Activity tests.
"""
import sys
import pytest
from pathlib import Path
from datetime import datetime, timezone
from typing import Iterable, Tuple
from dotenv import load_dotenv

# Ensure the repository root and src/ are on sys.path so tests can import
# activity_engine and server.activity_api without installing the project.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
for path in (ROOT, SRC):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from activity_engine import (  # noqa: E402
    ActivityService,
    DailyTotals,
    DeviceInfo,
    InMemoryBackend,
    Sample,
    SampleStore,
)

# Load environment variables
load_dotenv()

# "Now" for every test: mid-afternoon UTC on 2026-10-19
FIXED_NOW = datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc)


# ============================================================================
# Engine Fixtures
# ============================================================================


@pytest.fixture
def fixed_now():
    """Return the frozen current time."""
    return FIXED_NOW


@pytest.fixture
def today():
    """Return the frozen current UTC day."""
    return FIXED_NOW.date()


@pytest.fixture
def clock():
    """Clock that always returns FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def backend():
    """Empty in-memory snapshot backend."""
    return InMemoryBackend()


@pytest.fixture
def store(backend, clock):
    """Sample store over the in-memory backend."""
    return SampleStore(backend, clock=clock)


@pytest.fixture
def service(backend, clock):
    """Activity service over the in-memory backend with default goals."""
    svc = ActivityService(backend, clock=clock)
    svc.load()
    return svc


@pytest.fixture
def make_payload():
    """
    Factory fixture for ingestion envelopes.

    Returns a function building ``{device, sample}`` payloads the way the
    mobile collector sends them.
    """

    def _make_payload(
        steps=1000,
        calories=50.0,
        distance=700.0,
        start="2026-10-19T08:00:00Z",
        end="2026-10-19T09:00:00Z",
        device_id="device-a",
    ) -> dict:
        return {
            "device": {"deviceId": device_id, "model": "iPhone 15", "osVersion": "18.0"},
            "sample": {
                "steps": steps,
                "distance": distance,
                "calories": calories,
                "start": start,
                "end": end,
            },
        }

    return _make_payload


@pytest.fixture
def make_sample():
    """Factory fixture for stored samples."""
    counter = {"n": 0}

    def _make_sample(steps, calories=0.0, end="2026-10-19T09:00:00Z", device_id="device-a", start=None) -> Sample:
        counter["n"] += 1
        return Sample(
            id=f"sample-{counter['n']}",
            received_at=FIXED_NOW.isoformat(),
            device=DeviceInfo(device_id=device_id),
            steps=steps,
            calories=calories,
            start=start or end,
            end=end,
        )

    return _make_sample


@pytest.fixture
def make_daily():
    """Factory fixture for daily aggregates from ``(date, steps, calories)`` tuples."""

    def _make_daily(rows: Iterable[Tuple[str, int, float]]) -> dict:
        return {day: DailyTotals(date=day, steps=steps, calories=calories) for day, steps, calories in rows}

    return _make_daily


# ============================================================================
# API Fixtures
# ============================================================================


@pytest.fixture
def api_service(tmp_path, clock):
    """Activity service persisting to a temporary SQLite file."""
    from server.activity_api.database import SqliteSnapshotBackend

    svc = ActivityService(SqliteSnapshotBackend(str(tmp_path / "activity.db")), clock=clock)
    svc.load()
    return svc


@pytest.fixture
def api_client(api_service):
    """FastAPI test client wired to ``api_service``."""
    from fastapi.testclient import TestClient

    from server.activity_api.database import get_activity_service
    from server.activity_api.main import app

    app.dependency_overrides[get_activity_service] = lambda: api_service
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
