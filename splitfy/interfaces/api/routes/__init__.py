from fastapi import FastAPI

from .activity import router as activity_router
from .analytics import router as analytics_router
from .contracts import router as contracts_router
from .matches import router as matches_router
from .messages import router as messages_router
from .negotiations import router as negotiations_router
from .notifications import router as notifications_router
from .profiles import router as profiles_router

API_PREFIX = "/api"


def register_routes(app: FastAPI) -> None:
    """Mount every API router below ``/api``."""

    app.include_router(profiles_router, prefix=API_PREFIX)
    app.include_router(activity_router, prefix=API_PREFIX)
    app.include_router(matches_router, prefix=API_PREFIX)
    app.include_router(messages_router, prefix=API_PREFIX)
    app.include_router(negotiations_router, prefix=API_PREFIX)
    app.include_router(contracts_router, prefix=API_PREFIX)
    app.include_router(analytics_router, prefix=API_PREFIX)
    app.include_router(notifications_router, prefix=API_PREFIX)
