"""Pydantic domain models served through the generic JSON resources."""

from caprest.schemas.pet import Pet

__all__ = [
    "Pet",
]
