"""Shared request-scoped lookups for endpoints."""

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from caprest.config import Settings
from caprest.repository import Repository
from caprest.schemas.pet import Pet


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    """Return the session factory stored on app state.

    The factory is created during the application lifespan and stored on
    ``request.app.state.session_factory``.
    """
    return request.app.state.session_factory


def get_pet_repository(request: Request) -> Repository[Pet]:
    """Return the pet repository stored on app state.

    The lifespan stores a ``SQLAlchemyRepository`` there; tests may replace
    it with an ``InMemoryRepository``.
    """
    return request.app.state.pet_repository
