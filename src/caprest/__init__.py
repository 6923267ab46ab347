"""Capability-based REST resources on FastAPI.

A resource declares a content type and implements any subset of the read,
create, update, partial-update and delete capabilities. An endpoint
resolves each request to a resource, and the dispatcher routes the verb to
the matching capability or answers 405.
"""

from caprest.codec import Codec, JSONCodec
from caprest.dispatcher import MethodTable, Operation, select_operation
from caprest.endpoint import Endpoint, EndpointHandler, mount_endpoint
from caprest.errors import FieldErrors, ResourceError
from caprest.generic import (
    JSONListResource,
    JSONReadOnlyListResource,
    JSONReadOnlyResource,
    JSONResource,
    Persistable,
    PersistableModel,
)
from caprest.repository import InMemoryRepository, Repository, SQLAlchemyRepository
from caprest.resource import (
    JSON_CONTENT_TYPE,
    Capabilities,
    Creatable,
    Deletable,
    PartialUpdatable,
    Readable,
    Resource,
    ResourceDescriptor,
    SupportsCapabilities,
    Updatable,
)

__all__ = [
    "JSON_CONTENT_TYPE",
    "Capabilities",
    "Codec",
    "Creatable",
    "Deletable",
    "Endpoint",
    "EndpointHandler",
    "FieldErrors",
    "InMemoryRepository",
    "JSONCodec",
    "JSONListResource",
    "JSONReadOnlyListResource",
    "JSONReadOnlyResource",
    "JSONResource",
    "MethodTable",
    "Operation",
    "PartialUpdatable",
    "Persistable",
    "PersistableModel",
    "Readable",
    "Repository",
    "Resource",
    "ResourceDescriptor",
    "ResourceError",
    "SQLAlchemyRepository",
    "SupportsCapabilities",
    "Updatable",
    "mount_endpoint",
    "select_operation",
]
