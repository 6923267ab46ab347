"""Resource and capability contracts.

A resource declares a content type and any subset of five capabilities.
The HTTP verbs a resource answers are determined solely by which
capabilities it provides:

=================  ==================  ======
Capability         Method              Verb
=================  ==================  ======
Readable           ``read()``          GET
Creatable          ``create(body)``    POST
Updatable          ``update(body)``    PUT
PartialUpdatable   ``partial_update``  PATCH
Deletable          ``delete()``        DELETE
=================  ==================  ======

Capabilities are collected into a ``Capabilities`` descriptor of optional
slots. The dispatcher only ever checks whether a slot is filled, so a
resource can be a ``Resource`` subclass that defines some of the methods
above, or a ``ResourceDescriptor`` assembled from plain coroutine functions.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

JSON_CONTENT_TYPE = "application/json"

ReadFn = Callable[[], Awaitable[bytes]]
CreateFn = Callable[[bytes], Awaitable["SupportsCapabilities"]]
UpdateFn = Callable[[bytes], Awaitable[None]]
DeleteFn = Callable[[], Awaitable[None]]


# ---------------------------------------------------------------------------
# Capability contracts
# ---------------------------------------------------------------------------


@runtime_checkable
class Readable(Protocol):
    """Responds to GET with bytes matching the resource's content type."""

    async def read(self) -> bytes: ...


@runtime_checkable
class Creatable(Protocol):
    """Responds to POST by creating a new resource from the request body."""

    async def create(self, body: bytes) -> SupportsCapabilities: ...


@runtime_checkable
class Updatable(Protocol):
    """Responds to PUT by replacing the resource with the request body."""

    async def update(self, body: bytes) -> None: ...


@runtime_checkable
class PartialUpdatable(Protocol):
    """Responds to PATCH by merging the request body into the resource."""

    async def partial_update(self, body: bytes) -> None: ...


@runtime_checkable
class Deletable(Protocol):
    """Responds to DELETE by removing the resource."""

    async def delete(self) -> None: ...


# ---------------------------------------------------------------------------
# Capability descriptor
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Capabilities:
    """The capability slots a resource fills. ``None`` means unsupported."""

    read: ReadFn | None = None
    create: CreateFn | None = None
    update: UpdateFn | None = None
    partial_update: UpdateFn | None = None
    delete: DeleteFn | None = None

    @classmethod
    def of(cls, resource: object) -> Capabilities:
        """Collect the capability methods ``resource`` implements."""
        return cls(
            read=resource.read if isinstance(resource, Readable) else None,
            create=resource.create if isinstance(resource, Creatable) else None,
            update=resource.update if isinstance(resource, Updatable) else None,
            partial_update=(
                resource.partial_update
                if isinstance(resource, PartialUpdatable)
                else None
            ),
            delete=resource.delete if isinstance(resource, Deletable) else None,
        )

    def allowed_methods(self) -> list[str]:
        """Return the HTTP verbs these capabilities answer, in a stable order."""
        methods = []
        if self.read is not None:
            methods.append("GET")
        if self.create is not None:
            methods.append("POST")
        if self.update is not None:
            methods.append("PUT")
        if self.partial_update is not None:
            methods.append("PATCH")
        if self.delete is not None:
            methods.append("DELETE")
        return methods


class SupportsCapabilities(Protocol):
    """Anything the dispatcher can route: a content type plus capabilities."""

    @property
    def content_type(self) -> str: ...

    @property
    def capabilities(self) -> Capabilities: ...


class Resource:
    """Base class for resources implemented as methods.

    Subclasses define any of ``read``, ``create``, ``update``,
    ``partial_update`` and ``delete`` as coroutine methods; the
    ``capabilities`` descriptor is derived from whichever are present.
    A subclass defining none of them is a legal resource that answers
    every verb with 405.
    """

    content_type: str = JSON_CONTENT_TYPE

    @property
    def capabilities(self) -> Capabilities:
        return Capabilities.of(self)


@dataclass(frozen=True)
class ResourceDescriptor:
    """A resource assembled from coroutine functions instead of methods.

    Example::

        async def read() -> bytes:
            return b'{"status": "ok"}'

        status = ResourceDescriptor(
            content_type="application/json",
            capabilities=Capabilities(read=read),
        )
    """

    content_type: str = JSON_CONTENT_TYPE
    capabilities: Capabilities = field(default_factory=Capabilities)
