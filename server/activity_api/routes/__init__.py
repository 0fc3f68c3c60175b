"""API route modules."""
from .metrics import router as metrics_router
from .goals import router as goals_router
from .summary import router as summary_router

__all__ = [
    "metrics_router",
    "goals_router",
    "summary_router",
]
