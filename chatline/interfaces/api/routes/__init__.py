from fastapi import FastAPI

from .messages import router as messages_router
from .notifications import router as notifications_router
from .push import router as push_router
from .realtime import router as realtime_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(messages_router)
    app.include_router(notifications_router)
    app.include_router(push_router)
    app.include_router(realtime_router)
