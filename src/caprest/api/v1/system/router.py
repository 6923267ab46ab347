"""System router providing the health check resource."""

import logging

from fastapi import APIRouter
from sqlalchemy import text
from starlette.requests import Request

from caprest.api.deps import get_session_factory
from caprest.endpoint import mount_endpoint
from caprest.generic import JSONReadOnlyResource

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthEndpoint:
    """Read-only resource reporting database connectivity.

    The representation is ``{"status": "healthy" | "degraded",
    "database": "connected" | "disconnected"}``. Any verb other than GET
    is answered with 405.
    """

    async def resolve(self, request: Request) -> JSONReadOnlyResource:
        db_ok = False
        try:
            session_factory = get_session_factory(request)
            async with session_factory() as session:
                await session.execute(text("SELECT 1"))
            db_ok = True
        except Exception:
            logger.warning("Database health check failed", exc_info=True)

        return JSONReadOnlyResource(
            {
                "status": "healthy" if db_ok else "degraded",
                "database": "connected" if db_ok else "disconnected",
            }
        )


mount_endpoint(router, "/health", HealthEndpoint(), name="health")
