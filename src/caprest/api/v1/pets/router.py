"""Pets collection and item endpoints built from the generic JSON resources.

``/pets`` answers GET (list) and POST (create). ``/pets/{pet_id}`` answers
GET, PUT, PATCH and DELETE. Every other verb gets 405 from the dispatcher.
Pets are validated against the ``pet_max_age`` of the app's settings.
"""

from __future__ import annotations

from fastapi import APIRouter
from starlette.requests import Request

from caprest.api.deps import get_app_settings, get_pet_repository
from caprest.endpoint import mount_endpoint
from caprest.generic import JSONListResource, JSONResource
from caprest.schemas.pet import Pet

router = APIRouter()


class PetListEndpoint:
    """Resolves the pets collection. Always exists."""

    async def resolve(self, request: Request) -> JSONListResource[Pet]:
        max_age = get_app_settings(request).pet_max_age
        repository = get_pet_repository(request)
        pets = await repository.list()
        return JSONListResource(
            pets,
            factory=lambda: Pet().limit_age(max_age),
            repository=repository,
        )


class PetEndpoint:
    """Resolves a single pet by the ``pet_id`` path parameter."""

    async def resolve(self, request: Request) -> JSONResource[Pet] | None:
        max_age = get_app_settings(request).pet_max_age
        repository = get_pet_repository(request)
        pet = await repository.get(request.path_params["pet_id"])
        if pet is None:
            return None
        return JSONResource(pet.limit_age(max_age), repository)


mount_endpoint(router, "/pets", PetListEndpoint(), name="pets")
mount_endpoint(router, "/pets/{pet_id}", PetEndpoint(), name="pet")
