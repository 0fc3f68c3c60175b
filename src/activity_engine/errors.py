"""Errors raised by the activity engine."""


class ActivityEngineError(Exception):
    """Base class for activity engine errors."""


class ValidationError(ActivityEngineError):
    """Raised when an ingestion payload or goal update is rejected.

    No state is mutated when this is raised.
    """


class PersistenceError(ActivityEngineError):
    """Raised when a snapshot write fails after the in-memory mutation.

    Memory and durable storage disagree until the next successful write,
    so callers should treat the operation as failed and may retry it.
    """
