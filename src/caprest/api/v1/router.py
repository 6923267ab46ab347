"""V1 API router aggregating all sub-routers."""

from fastapi import APIRouter

from caprest.api.v1.pets.router import router as pets_router
from caprest.api.v1.system.router import router as system_router

v1_router = APIRouter()
v1_router.include_router(system_router, prefix="/system", tags=["system"])
v1_router.include_router(pets_router, tags=["pets"])
