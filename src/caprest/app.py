"""FastAPI application factory with async lifespan for the database and pet storage."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from caprest.api.v1.router import v1_router
from caprest.config import Settings, get_settings
from caprest.database import close_db, create_schema, get_session_factory, init_db
from caprest.models import PetRecord
from caprest.repository import SQLAlchemyRepository
from caprest.schemas.pet import Pet

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure the root logger for the service process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown lifecycle.

    On startup: initialize the database engine and session factory, create
    the schema when ``create_schema`` is set, and build the pet repository.
    On shutdown: dispose of the engine.
    """
    settings: Settings = app.state.settings

    engine = await init_db(settings.database_url, echo=settings.debug)
    app.state.db_engine = engine
    app.state.session_factory = get_session_factory(engine)
    if settings.create_schema:
        await create_schema(engine)

    app.state.pet_repository = SQLAlchemyRepository(
        app.state.session_factory, PetRecord, Pet,
    )
    logger.info("caprest started (database=%s)", engine.url.render_as_string())

    yield

    await close_db(engine)
    logger.info("caprest stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the app factory. Uvicorn calls it with the --factory flag:
        uvicorn caprest.app:create_app --factory
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="caprest",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )
    app.state.settings = settings

    app.include_router(v1_router, prefix=settings.api_prefix)

    return app
