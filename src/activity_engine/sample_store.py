"""
Sample Store.

Ordered, append/replace-only collection of ingested activity samples.

A sample is identified for deduplication by ``(deviceId, start, end)``:
re-sending the same observation window replaces the stored measurements
in place (keeping the original id and position) instead of appending a
duplicate. Every mutation writes the full snapshot through the backend
before returning.
"""

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .clock import Clock, iso, parse_timestamp, utc_now
from .errors import PersistenceError, ValidationError
from .numbers import coerce_number, coerce_steps
from .storage import SnapshotBackend

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"

CREATED = "created"
UPDATED = "updated"

DedupKey = Tuple[str, str, str]


@dataclass(frozen=True)
class DeviceInfo:
    """Device that produced a sample."""

    device_id: str = UNKNOWN
    model: str = UNKNOWN
    os_version: str = UNKNOWN

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "device_id": self.device_id,
            "model": self.model,
            "os_version": self.os_version,
        }


@dataclass(frozen=True)
class Sample:
    """One stored motion-sensor observation window."""

    id: str
    received_at: str
    device: DeviceInfo
    steps: int = 0
    distance: float = 0.0  # meters
    calories: float = 0.0
    start: str = ""
    end: str = ""

    @property
    def dedup_key(self) -> DedupKey:
        return (self.device.device_id, self.start, self.end)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "received_at": self.received_at,
            "device": self.device.to_dict(),
            "sample": {
                "steps": self.steps,
                "distance": self.distance,
                "calories": self.calories,
                "start": self.start,
                "end": self.end,
            },
        }


@dataclass(frozen=True)
class IngestResult:
    """Outcome of a single ingestion."""

    status: str  # created, updated
    id: str

    @property
    def created(self) -> bool:
        return self.status == CREATED

    def to_dict(self) -> dict:
        return {"status": self.status, "id": self.id}


def _text(value: Any) -> str:
    if value is None:
        return UNKNOWN
    return value if isinstance(value, str) else str(value)


def _timestamp(value: Any, now: datetime) -> str:
    """Keep string timestamps verbatim; they are part of the dedup key."""
    if value is None:
        return iso(now)
    if isinstance(value, str):
        return value
    parsed = parse_timestamp(value)
    if parsed is not None:
        return iso(parsed)
    return str(value)


def normalize_sample(payload: Any, now: Optional[datetime] = None) -> Sample:
    """
    Build a Sample from a loosely-typed ingestion envelope.

    Expected shape::

        {"device": {"deviceId", "model", "osVersion"},
         "sample": {"steps", "distance", "calories", "start", "end"}}

    Numeric fields that are missing or not numeric become 0, missing
    timestamps become ``now`` and missing device fields become "unknown".

    Raises:
        ValidationError: if the envelope has no ``sample`` object.
    """
    if not isinstance(payload, Mapping) or not isinstance(payload.get("sample"), Mapping):
        raise ValidationError("sample payload is required")

    if now is None:
        now = utc_now()

    body = payload["sample"]
    device = payload.get("device")
    if not isinstance(device, Mapping):
        device = {}

    return Sample(
        id=str(uuid.uuid4()),
        received_at=iso(now),
        device=DeviceInfo(
            device_id=_text(device.get("deviceId")),
            model=_text(device.get("model")),
            os_version=_text(device.get("osVersion")),
        ),
        steps=coerce_steps(body.get("steps")),
        distance=coerce_number(body.get("distance")),
        calories=coerce_number(body.get("calories")),
        start=_timestamp(body.get("start"), now),
        end=_timestamp(body.get("end"), now),
    )


def _parse_limit(limit: Any) -> Optional[int]:
    value = coerce_number(limit, fallback=0.0)
    if value <= 0:
        return None
    return int(value)


def sum_totals(samples: Iterable[Sample]) -> Dict[str, float]:
    """Plain sums of every sample's measurements (no deduplication by day)."""
    totals = {"steps": 0, "distance": 0.0, "calories": 0.0}
    for sample in samples:
        totals["steps"] += sample.steps
        totals["distance"] += sample.distance
        totals["calories"] += sample.calories
    return totals


class SampleStore:
    """
    Append/replace-only sample collection with synchronous persistence.

    Samples are immutable; a replacement swaps in a new Sample object at the
    same position, so snapshots handed to readers never change underneath
    them.
    """

    def __init__(self, backend: SnapshotBackend, clock: Clock = utc_now):
        self._backend = backend
        self._clock = clock
        self._samples: List[Sample] = []
        self._index: Dict[DedupKey, int] = {}

    def __len__(self) -> int:
        return len(self._samples)

    def load(self) -> int:
        """Replace in-memory state with the persisted snapshot."""
        self._samples = list(self._backend.load_samples())
        self._index = {
            sample.dedup_key: position for position, sample in enumerate(self._samples)
        }
        logger.info(f"[STORE] Loaded {len(self._samples)} samples")
        return len(self._samples)

    def snapshot(self) -> List[Sample]:
        """Return a copy of the stored samples in insertion order."""
        return list(self._samples)

    def ingest(self, payload: Any) -> IngestResult:
        """
        Insert a new sample or replace the one with the same dedup key.

        Args:
            payload: Raw ingestion envelope

        Returns:
            IngestResult with status "created" or "updated" and the sample id

        Raises:
            ValidationError: if the payload has no sample object
            PersistenceError: if the snapshot could not be written
        """
        incoming = normalize_sample(payload, self._clock())
        key = incoming.dedup_key
        position = self._index.get(key)

        if position is not None:
            existing = self._samples[position]
            self._samples[position] = replace(incoming, id=existing.id)
            result = IngestResult(status=UPDATED, id=existing.id)
        else:
            self._index[key] = len(self._samples)
            self._samples.append(incoming)
            result = IngestResult(status=CREATED, id=incoming.id)

        logger.debug(
            f"[STORE] {result.status} {result.id} device={key[0]} "
            f"steps={incoming.steps} window={key[1]}..{key[2]}"
        )
        self._persist()
        return result

    def query(self, since: Any = None, limit: Any = None) -> List[Sample]:
        """
        Filter stored samples, oldest first.

        Args:
            since: Drop samples whose ``end`` is earlier than this timestamp
                (ignored if unparseable)
            limit: Keep only the most recently inserted ``limit`` samples
                (ignored unless a positive number)
        """
        data = list(self._samples)

        cutoff = parse_timestamp(since) if since is not None else None
        if cutoff is not None:
            kept = []
            for sample in data:
                end = parse_timestamp(sample.end)
                if end is not None and end >= cutoff:
                    kept.append(sample)
            data = kept

        count = _parse_limit(limit)
        if count:
            data = data[-count:]

        return data

    def reset(self) -> None:
        """Clear the store and persist the empty snapshot."""
        removed = len(self._samples)
        self._samples = []
        self._index = {}
        self._persist()
        logger.info(f"[STORE] Cleared {removed} samples")

    def _persist(self) -> None:
        try:
            self._backend.save_samples(self.snapshot())
        except PersistenceError as e:
            logger.error(f"[STORE] Failed to persist {len(self._samples)} samples: {e}")
            raise
