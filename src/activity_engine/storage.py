"""
Snapshot storage interface.

The store and the goal configuration are each persisted as a complete
snapshot that is overwritten on every mutation. Backends must raise
PersistenceError when a write does not land.
"""

from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from .goals import GoalConfig
    from .sample_store import Sample


class SnapshotBackend(Protocol):
    """Durable storage for the sample and goal snapshots."""

    def load_samples(self) -> List["Sample"]:
        ...

    def save_samples(self, samples: Sequence["Sample"]) -> None:
        ...

    def load_goals(self) -> Optional["GoalConfig"]:
        ...

    def save_goals(self, goal: "GoalConfig") -> None:
        ...


class InMemoryBackend:
    """Backend that keeps snapshots in process memory (tests, ephemeral runs)."""

    def __init__(self, samples: Optional[Sequence["Sample"]] = None, goals: Optional["GoalConfig"] = None):
        self.samples: List["Sample"] = list(samples or [])
        self.goals: Optional["GoalConfig"] = goals
        self.sample_writes = 0
        self.goal_writes = 0

    def load_samples(self) -> List["Sample"]:
        return list(self.samples)

    def save_samples(self, samples: Sequence["Sample"]) -> None:
        self.samples = list(samples)
        self.sample_writes += 1

    def load_goals(self) -> Optional["GoalConfig"]:
        return self.goals

    def save_goals(self, goal: "GoalConfig") -> None:
        self.goals = goal
        self.goal_writes += 1
