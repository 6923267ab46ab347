"""Endpoints: resolving a request to a resource and serving it.

An ``Endpoint`` maps an incoming request to at most one resource. The
``EndpointHandler`` runs the full request cycle::

    resolve -> 404 if nothing resolved
            -> dispatch by verb -> 405 if the capability is missing
            -> run the operation -> 200/201/400/500

``mount_endpoint`` registers an endpoint on a FastAPI router so the
handler receives every verb, including ones no capability answers.
"""

from __future__ import annotations

import logging
from typing import Protocol

from fastapi import APIRouter
from starlette.requests import Request
from starlette.responses import Response

from caprest.dispatcher import MethodTable
from caprest.resource import SupportsCapabilities

logger = logging.getLogger(__name__)


class Endpoint(Protocol):
    """Maps a request to the resource it addresses.

    Implementations typically read path parameters, look the object up in
    a repository and wrap it in a resource. Returning None yields 404
    regardless of the verb.
    """

    async def resolve(self, request: Request) -> SupportsCapabilities | None: ...


class EndpointHandler:
    """Serve requests for one endpoint.

    Args:
        endpoint: Resolver producing the resource for each request.
    """

    def __init__(self, endpoint: Endpoint) -> None:
        self.endpoint = endpoint

    async def __call__(self, request: Request) -> Response:
        resource = await self.endpoint.resolve(request)
        if resource is None:
            logger.debug("No resource for %s %s", request.method, request.url.path)
            return Response(status_code=404)

        table = MethodTable.for_resource(resource)
        operation = table.lookup(request.method)
        if operation is None:
            logger.debug(
                "%s not supported on %s", request.method, request.url.path,
            )
            allowed = table.allowed_methods()
            headers = {"Allow": ", ".join(allowed)} if allowed else None
            return Response(status_code=405, headers=headers)
        return await operation(request)


def mount_endpoint(
    router: APIRouter,
    path: str,
    endpoint: Endpoint,
    *,
    name: str | None = None,
) -> None:
    """Register ``endpoint`` on ``router`` at ``path`` for every verb.

    The route places no restriction on the method, so unknown verbs (HEAD,
    TRACE, ...) still go through resolution and get 404 or an empty 405
    from the handler rather than the framework's own 405.

    ``path`` must start with ``/``. Path parameters declared in it
    (``/{pet_id}``) are available to the endpoint through
    ``request.path_params``.
    """
    handler = EndpointHandler(endpoint)

    async def handle(request: Request) -> Response:
        return await handler(request)

    router.add_route(
        path,
        handle,
        methods=None,
        name=name or type(endpoint).__name__,
        include_in_schema=False,
    )
