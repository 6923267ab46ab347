"""Capability contracts -- verifies capability discovery on resources.

Tests:
    - Resource subclasses expose exactly the methods they define
    - ResourceDescriptor exposes its closure slots
    - allowed_methods reports verbs in a stable order
"""

from caprest.resource import (
    JSON_CONTENT_TYPE,
    Capabilities,
    Readable,
    Resource,
    ResourceDescriptor,
)


class ReadOnly(Resource):
    async def read(self) -> bytes:
        return b"{}"


class Everything(Resource):
    content_type = "text/csv"

    async def read(self) -> bytes:
        return b"a,b"

    async def create(self, body: bytes) -> Resource:
        return ReadOnly()

    async def update(self, body: bytes) -> None:
        return None

    async def partial_update(self, body: bytes) -> None:
        return None

    async def delete(self) -> None:
        return None


def test_empty_resource_has_no_capabilities():
    resource = Resource()
    assert resource.content_type == JSON_CONTENT_TYPE
    assert resource.capabilities == Capabilities()
    assert resource.capabilities.allowed_methods() == []


def test_read_only_resource_fills_only_read_slot():
    caps = ReadOnly().capabilities
    assert caps.read is not None
    assert caps.create is None
    assert caps.update is None
    assert caps.partial_update is None
    assert caps.delete is None
    assert isinstance(ReadOnly(), Readable)


def test_full_resource_fills_every_slot():
    resource = Everything()
    caps = resource.capabilities
    assert caps.allowed_methods() == ["GET", "POST", "PUT", "PATCH", "DELETE"]
    assert resource.content_type == "text/csv"


async def test_capability_slots_are_bound_methods():
    assert await ReadOnly().capabilities.read() == b"{}"


async def test_descriptor_built_from_closures():
    deleted = []

    async def delete() -> None:
        deleted.append(True)

    descriptor = ResourceDescriptor(
        content_type="text/plain",
        capabilities=Capabilities(delete=delete),
    )

    assert descriptor.capabilities.allowed_methods() == ["DELETE"]
    await descriptor.capabilities.delete()
    assert deleted == [True]
