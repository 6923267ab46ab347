"""Storage collaborators injected into the generic resource adapters.

A repository owns the shared store behind a collection of pydantic models.
Adapters never touch storage directly; they call ``save`` only after a
model has passed validation. Repositories hand out independent copies, so
a model being edited during a request never aliases stored state.

Concurrency is an explicit property of each implementation:

- ``InMemoryRepository`` serializes writes with an ``asyncio.Lock`` when
  ``serialize_writes`` is true (the default); otherwise last write wins.
- ``SQLAlchemyRepository`` runs every read and write in its own session
  and transaction, deferring ordering to the database.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import AbstractAsyncContextManager, nullcontext
from typing import Generic, Protocol, TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from caprest.errors import ResourceError
from caprest.models.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class Repository(Protocol[ModelT]):
    """Keyed storage for one model type."""

    async def list(self) -> list[ModelT]: ...

    async def get(self, key: str) -> ModelT | None: ...

    async def save(self, instance: ModelT) -> None: ...

    async def remove(self, instance: ModelT) -> None: ...


def _key_of(instance: BaseModel, key_field: str) -> str:
    return str(getattr(instance, key_field))


class InMemoryRepository(Generic[ModelT]):
    """Dictionary-backed repository preserving insertion order.

    Args:
        key_field: Name of the model field holding the key.
        serialize_writes: Serialize ``save``/``remove`` through a lock.
    """

    def __init__(self, key_field: str = "id", *, serialize_writes: bool = True) -> None:
        self.key_field = key_field
        self.serialize_writes = serialize_writes
        self._items: dict[str, ModelT] = {}
        self._lock = asyncio.Lock()

    def _writing(self) -> AbstractAsyncContextManager[object]:
        return self._lock if self.serialize_writes else nullcontext()

    async def list(self) -> list[ModelT]:
        return [item.model_copy(deep=True) for item in self._items.values()]

    async def get(self, key: str) -> ModelT | None:
        item = self._items.get(key)
        return item.model_copy(deep=True) if item is not None else None

    async def save(self, instance: ModelT) -> None:
        """Insert or replace the stored copy under the instance's key."""
        async with self._writing():
            self._items[_key_of(instance, self.key_field)] = instance.model_copy(
                deep=True
            )

    async def remove(self, instance: ModelT) -> None:
        """Remove the stored copy.

        Raises:
            ResourceError: If nothing is stored under the instance's key.
        """
        key = _key_of(instance, self.key_field)
        async with self._writing():
            if self._items.pop(key, None) is None:
                raise ResourceError(f"no stored object with key {key!r}")


class SQLAlchemyRepository(Generic[ModelT]):
    """Repository persisting models as rows of a declarative table.

    The record class must declare a column for every model field, with the
    key field as primary key. Rows are converted back into models with
    ``from_attributes`` validation.

    Args:
        session_factory: Async session factory bound to the engine.
        record_cls: SQLAlchemy declarative class backing the model.
        model_cls: Pydantic model type returned to callers.
        key_field: Name of the model field holding the primary key.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        record_cls: type[Base],
        model_cls: type[ModelT],
        key_field: str = "id",
    ) -> None:
        self.session_factory = session_factory
        self.record_cls = record_cls
        self.model_cls = model_cls
        self.key_field = key_field

    def _to_model(self, record: Base) -> ModelT:
        return self.model_cls.model_validate(record, from_attributes=True)

    async def list(self) -> list[ModelT]:
        """Return all stored models, oldest first."""
        key_column = getattr(self.record_cls, self.key_field)
        query = select(self.record_cls)
        created_at = getattr(self.record_cls, "created_at", None)
        if created_at is not None:
            query = query.order_by(created_at.asc(), key_column.asc())
        else:
            query = query.order_by(key_column.asc())

        async with self.session_factory() as session:
            result = await session.execute(query)
            return [self._to_model(record) for record in result.scalars().all()]

    async def get(self, key: str) -> ModelT | None:
        async with self.session_factory() as session:
            record = await session.get(self.record_cls, key)
            return self._to_model(record) if record is not None else None

    async def save(self, instance: ModelT) -> None:
        """Insert or update the row for ``instance`` in one transaction."""
        async with self.session_factory() as session:
            await session.merge(self.record_cls(**instance.model_dump()))
            await session.commit()
        logger.debug(
            "Saved %s %s",
            self.model_cls.__name__,
            _key_of(instance, self.key_field),
        )

    async def remove(self, instance: ModelT) -> None:
        """Delete the row for ``instance``.

        Raises:
            ResourceError: If no row exists for the instance's key.
        """
        key = _key_of(instance, self.key_field)
        async with self.session_factory() as session:
            record = await session.get(self.record_cls, key)
            if record is None:
                raise ResourceError(f"no stored object with key {key!r}")
            await session.delete(record)
            await session.commit()
        logger.debug("Removed %s %s", self.model_cls.__name__, key)
