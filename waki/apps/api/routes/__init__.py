from .alarms import router as alarms_router
from .analytics import router as analytics_router
from .goals import router as goals_router
from .journal import router as journal_router
from .preferences import router as preferences_router

__all__ = ["alarms_router", "analytics_router", "goals_router", "journal_router", "preferences_router"]
