"""Generic JSON resources wrapping pydantic models.

These adapters implement the capability contracts for the common case of
a JSON-encodable domain object stored in a repository, so most endpoints
only need to look objects up and wrap them:

- ``JSONReadOnlyResource`` -- GET of any JSON-encodable value.
- ``JSONResource`` -- GET, PUT, PATCH and DELETE of one persistable model.
- ``JSONReadOnlyListResource`` -- GET of a sequence.
- ``JSONListResource`` -- GET of a sequence and POST of new models.

Every mutation validates before it persists. A failed validation raises
``FieldErrors`` and leaves the repository untouched.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, ClassVar, Generic, Protocol, TypeVar

from pydantic import BaseModel

from caprest.codec import Codec, JSONCodec
from caprest.errors import FieldErrors
from caprest.repository import Repository
from caprest.resource import Resource


class Persistable(Protocol):
    """A domain object the generic adapters can reset and validate."""

    key_field: ClassVar[str]

    def reset(self) -> None: ...

    def validate_fields(self) -> FieldErrors | None: ...


class PersistableModel(BaseModel):
    """Base pydantic model satisfying ``Persistable``.

    Give every field a default so ``reset`` can restore it. Subclasses
    override ``validate_fields`` to enforce domain rules.
    """

    key_field: ClassVar[str] = "id"

    def reset(self) -> None:
        """Restore every defaulted field except the key to its default."""
        for name, info in type(self).model_fields.items():
            if name == self.key_field or info.is_required():
                continue
            setattr(self, name, info.get_default(call_default_factory=True))

    def validate_fields(self) -> FieldErrors | None:
        """Return field errors, or None when the model is valid."""
        return None


PersistableT = TypeVar("PersistableT", bound=PersistableModel)


class JSONReadOnlyResource(Resource):
    """Read-only resource rendering any JSON-encodable value."""

    def __init__(self, value: Any, codec: Codec | None = None) -> None:
        self.value = value
        self.codec = codec or JSONCodec()
        self.content_type = self.codec.content_type

    async def read(self) -> bytes:
        return self.codec.encode(self.value)


class JSONResource(Resource, Generic[PersistableT]):
    """Resource for one persistable model.

    PUT replaces the model: a reset copy has the body merged onto it. PATCH
    merges the body onto a copy of the current model. Either way the result
    is validated, saved, and only then becomes the wrapped instance. The key
    field cannot be changed through the body.

    Args:
        instance: The model looked up for this request.
        repository: Storage the model is saved to and removed from.
        codec: Codec for reads and body decoding (JSON by default).
    """

    def __init__(
        self,
        instance: PersistableT,
        repository: Repository[PersistableT],
        codec: Codec | None = None,
    ) -> None:
        self.instance = instance
        self.repository = repository
        self.codec = codec or JSONCodec()
        self.content_type = self.codec.content_type

    async def read(self) -> bytes:
        return self.codec.encode(self.instance)

    async def update(self, body: bytes) -> None:
        blank = self.instance.model_copy(deep=True)
        blank.reset()
        await self._merge(body, blank)

    async def partial_update(self, body: bytes) -> None:
        await self._merge(body, self.instance)

    async def delete(self) -> None:
        await self.repository.remove(self.instance)

    async def _merge(self, body: bytes, base: PersistableT) -> None:
        candidate = self.codec.decode_onto(body, base)

        key_field = candidate.key_field
        if getattr(candidate, key_field) != getattr(self.instance, key_field):
            raise FieldErrors({key_field: "cannot be changed"})

        errors = candidate.validate_fields()
        if errors is not None:
            raise errors

        await self.repository.save(candidate)
        self.instance = candidate


class JSONReadOnlyListResource(Resource):
    """Read-only resource rendering a sequence as a JSON array."""

    def __init__(self, values: Sequence[Any], codec: Codec | None = None) -> None:
        self.values = values
        self.codec = codec or JSONCodec()
        self.content_type = self.codec.content_type

    async def read(self) -> bytes:
        return self.codec.encode_list(self.values)


class JSONListResource(Resource, Generic[PersistableT]):
    """Collection resource listing models and creating new ones.

    Args:
        values: The models currently in the collection.
        factory: Returns a fresh default model that POST bodies are merged onto.
        repository: Storage new models are saved to.
        codec: Codec for reads and body decoding (JSON by default).
    """

    def __init__(
        self,
        values: Sequence[PersistableT],
        factory: Callable[[], PersistableT],
        repository: Repository[PersistableT],
        codec: Codec | None = None,
    ) -> None:
        self.values = values
        self.factory = factory
        self.repository = repository
        self.codec = codec or JSONCodec()
        self.content_type = self.codec.content_type

    async def read(self) -> bytes:
        return self.codec.encode_list(self.values)

    async def create(self, body: bytes) -> JSONResource[PersistableT]:
        """Create, validate and save a model built from ``body``.

        Returns:
            The saved model wrapped as a ``JSONResource``.

        Raises:
            ResourceError: If the body is not a JSON object.
            FieldErrors: If the model fails validation; nothing is saved.
        """
        candidate = self.codec.decode_onto(body, self.factory())
        errors = candidate.validate_fields()
        if errors is not None:
            raise errors

        await self.repository.save(candidate)
        return JSONResource(candidate, self.repository, self.codec)
