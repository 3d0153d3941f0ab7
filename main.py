from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chatline.config import get_settings
from chatline.infrastructure.database import engine, initialize_database
from chatline.infrastructure.push import WebPushSender
from chatline.infrastructure.realtime import RealtimeFanout
from chatline.interfaces.api.routes import register_routes
from chatline.logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup and release connections on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app(
    *,
    fanout: RealtimeFanout | None = None,
    push_sender: WebPushSender | None = None,
) -> FastAPI:
    """Create and configure the chat API application."""

    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="chatline", lifespan=lifespan)
    # One fan-out per process; every router and the websocket share it.
    app.state.fanout = fanout or RealtimeFanout()
    app.state.push_sender = push_sender or WebPushSender(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
