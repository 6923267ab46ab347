from caprest.models.base import Base, InsertionOrderMixin
from caprest.models.pet import PetRecord

__all__ = [
    "Base",
    "InsertionOrderMixin",
    "PetRecord",
]
