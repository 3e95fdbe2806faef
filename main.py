import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from splitfy.config import get_settings
from splitfy.infrastructure.database import engine, initialize_database
from splitfy.infrastructure.log_config import configure_logging
from splitfy.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare logging and the database schema, release the pool on shutdown."""

    configure_logging(get_settings().log_level)
    initialize_database()
    logger.info("Splitfy API started")
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the Splitfy API application."""

    settings = get_settings()
    app = FastAPI(title="Splitfy API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
