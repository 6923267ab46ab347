"""Pet domain model served by the reference pets endpoints.

``Pet`` is both the JSON representation and the persistable object the
generic adapters merge request bodies onto. Fields default to zero values
so a PUT body that omits a field clears it.
"""

from __future__ import annotations

from pydantic import Field, PrivateAttr

from caprest.errors import FieldErrors
from caprest.generic import PersistableModel

DEFAULT_MAX_AGE = 10


class Pet(PersistableModel):
    """A pet identified by a client-chosen ``id``."""

    id: str = Field(default="", max_length=100)
    name: str = Field(default="", max_length=100)
    age: int = 0

    # Not serialized; survives body merges because they go through model_copy
    _max_age: int = PrivateAttr(default=DEFAULT_MAX_AGE)

    def limit_age(self, max_age: int) -> Pet:
        """Set the oldest age ``validate_fields`` accepts and return self."""
        self._max_age = max_age
        return self

    def validate_fields(self) -> FieldErrors | None:
        """Check the pet against its rules.

        ``id`` must be non-empty and ``age`` must not exceed the limit set
        with ``limit_age``.
        """
        errors = FieldErrors()
        if not self.id:
            errors.add("id", "required")
        if self.age > self._max_age:
            errors.add("age", "Too old")
        return errors if errors.errors else None
