"""API route modules."""

from src.api.routes.dispatch import router as dispatch_router
from src.api.routes.health import router as health_router
from src.api.routes.lots import router as lots_router
from src.api.routes.reports import router as reports_router

__all__ = [
    "health_router",
    "lots_router",
    "dispatch_router",
    "reports_router",
]
