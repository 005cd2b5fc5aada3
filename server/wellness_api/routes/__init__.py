"""API route modules."""
from .moods import router as moods_router
from .journals import router as journals_router
from .goals import router as goals_router
from .habits import router as habits_router
from .tips import router as tips_router
from .analytics import router as analytics_router

__all__ = [
    "moods_router",
    "journals_router",
    "goals_router",
    "habits_router",
    "tips_router",
    "analytics_router",
]
