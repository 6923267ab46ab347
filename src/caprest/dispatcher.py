"""Verb-to-capability dispatch.

``select_operation`` maps an HTTP verb to the operation bound to the
matching capability of a resource:

    GET -> read, POST -> create, PUT -> update,
    PATCH -> partial_update, DELETE -> delete

OPTIONS and unknown verbs never select anything; a ``None`` result is
answered with 405 by the caller. Selection is pure and never mutates the
resource.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from starlette.requests import Request
from starlette.responses import Response

from caprest.operations import (
    CreateOperation,
    DeleteOperation,
    ReadOperation,
    UpdateOperation,
)
from caprest.resource import SupportsCapabilities

Operation = Callable[[Request], Awaitable[Response]]


@dataclass(frozen=True)
class MethodTable:
    """One optional operation per HTTP verb.

    ``MethodTable.for_resource`` fills the table from a resource's
    capabilities and never fills ``options``. A table built by hand can
    carry an OPTIONS handler supplied by the application.
    """

    get: Operation | None = None
    post: Operation | None = None
    put: Operation | None = None
    patch: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None

    @classmethod
    def for_resource(cls, resource: SupportsCapabilities) -> MethodTable:
        """Bind each capability the resource provides to its operation."""
        caps = resource.capabilities
        content_type = resource.content_type
        return cls(
            get=(
                ReadOperation(content_type, caps.read)
                if caps.read is not None
                else None
            ),
            post=(
                CreateOperation(content_type, caps.create)
                if caps.create is not None
                else None
            ),
            put=(
                UpdateOperation(content_type, caps.update, caps.read)
                if caps.update is not None
                else None
            ),
            patch=(
                UpdateOperation(content_type, caps.partial_update, caps.read)
                if caps.partial_update is not None
                else None
            ),
            delete=(
                DeleteOperation(caps.delete)
                if caps.delete is not None
                else None
            ),
        )

    def lookup(self, method: str) -> Operation | None:
        """Return the operation for ``method``, or None if there is none."""
        if method == "GET":
            return self.get
        if method == "POST":
            return self.post
        if method == "PUT":
            return self.put
        if method == "PATCH":
            return self.patch
        if method == "DELETE":
            return self.delete
        if method == "OPTIONS":
            return self.options
        return None

    def allowed_methods(self) -> list[str]:
        """Return the verbs with an operation, in a stable order."""
        slots = [
            ("GET", self.get),
            ("POST", self.post),
            ("PUT", self.put),
            ("PATCH", self.patch),
            ("DELETE", self.delete),
            ("OPTIONS", self.options),
        ]
        return [method for method, operation in slots if operation is not None]


def select_operation(
    resource: SupportsCapabilities, method: str,
) -> Operation | None:
    """Select the operation answering ``method`` on ``resource``.

    Args:
        resource: The resolved resource.
        method: The request's HTTP verb, upper case.

    Returns:
        A bound operation, or None when the resource lacks the capability
        the verb requires (or the verb has no capability at all).
    """
    return MethodTable.for_resource(resource).lookup(method)
