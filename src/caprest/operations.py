"""Per-verb operations translating between HTTP and resource capabilities.

Each operation wraps one capability of a resolved resource. Calling an
operation with a Starlette ``Request`` reads the body when the verb carries
one, invokes the capability and converts the outcome into a ``Response``.
Every failure is turned into a response here; nothing propagates to the
transport.

Status codes:
    200 -- read, update, partial update or delete succeeded
    201 -- create succeeded
    400 -- unreadable body, malformed input or validation failure
    500 -- created/updated resource could not be serialized, or delete failed
"""

from __future__ import annotations

import logging

from starlette.requests import ClientDisconnect, Request
from starlette.responses import PlainTextResponse, Response

from caprest.errors import FieldErrors
from caprest.resource import (
    JSON_CONTENT_TYPE,
    CreateFn,
    DeleteFn,
    ReadFn,
    UpdateFn,
)

logger = logging.getLogger(__name__)

DELETE_FAILED_MESSAGE = "error deleting object"


class BodyReadError(Exception):
    """The request body could not be read from the transport."""


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


async def read_body(request: Request) -> bytes:
    """Read the full request body as raw bytes.

    Raises:
        BodyReadError: If the client disconnected before the body arrived.
    """
    try:
        return await request.body()
    except ClientDisconnect as exc:
        raise BodyReadError("client disconnected while sending body") from exc


def error_response(exc: Exception) -> Response:
    """Build the 400 response for a failed create or update.

    ``FieldErrors`` are rendered as a JSON object; any other error is
    rendered as its message in plain text.
    """
    if isinstance(exc, FieldErrors):
        return Response(
            content=exc.to_json(),
            status_code=400,
            media_type=JSON_CONTENT_TYPE,
        )
    return PlainTextResponse(content=str(exc), status_code=400)


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


class ReadOperation:
    """GET: serialize the resource.

    A read failure is reported as 400 with an empty body.

    Args:
        content_type: The resource's declared content type.
        read: The resource's read capability.
    """

    def __init__(self, content_type: str, read: ReadFn) -> None:
        self.content_type = content_type
        self.read = read

    async def __call__(self, request: Request) -> Response:
        try:
            data = await self.read()
        except Exception:
            logger.warning(
                "Read failed for %s %s", request.method, request.url.path,
                exc_info=True,
            )
            return Response(status_code=400)
        return Response(content=data, status_code=200, media_type=self.content_type)


class CreateOperation:
    """POST: create a new resource from the body and return its representation.

    Args:
        content_type: The collection resource's declared content type, used
            for the created representation.
        create: The resource's create capability.
    """

    def __init__(self, content_type: str, create: CreateFn) -> None:
        self.content_type = content_type
        self.create = create

    async def __call__(self, request: Request) -> Response:
        try:
            body = await read_body(request)
        except BodyReadError:
            logger.debug("Unreadable body on %s", request.url.path, exc_info=True)
            return Response(status_code=400)

        try:
            created = await self.create(body)
        except FieldErrors as exc:
            logger.debug("Create rejected on %s: %s", request.url.path, exc)
            return error_response(exc)
        except Exception as exc:
            logger.warning("Create failed on %s: %s", request.url.path, exc)
            return error_response(exc)

        read = created.capabilities.read
        if read is None:
            logger.error(
                "Created resource on %s is not readable", request.url.path,
            )
            return Response(status_code=500)
        try:
            data = await read()
        except Exception:
            logger.error(
                "Could not serialize created resource on %s", request.url.path,
                exc_info=True,
            )
            return Response(status_code=500)

        return Response(content=data, status_code=201, media_type=self.content_type)


class UpdateOperation:
    """PUT or PATCH: apply the body, then return the resulting state.

    The same translation serves both full replacement and partial update;
    only the capability differs. When the resource is also readable it is
    re-read after the mutation so the client sees the new state. A failing
    re-read yields 500 since the mutation already happened.

    Args:
        content_type: The resource's declared content type.
        update: The update or partial-update capability.
        read: The resource's read capability, if any.
    """

    def __init__(
        self,
        content_type: str,
        update: UpdateFn,
        read: ReadFn | None = None,
    ) -> None:
        self.content_type = content_type
        self.update = update
        self.read = read

    async def __call__(self, request: Request) -> Response:
        try:
            body = await read_body(request)
        except BodyReadError:
            logger.debug("Unreadable body on %s", request.url.path, exc_info=True)
            return Response(status_code=400)

        try:
            await self.update(body)
        except FieldErrors as exc:
            logger.debug(
                "%s rejected on %s: %s", request.method, request.url.path, exc,
            )
            return error_response(exc)
        except Exception as exc:
            logger.warning(
                "%s failed on %s: %s", request.method, request.url.path, exc,
            )
            return error_response(exc)

        if self.read is None:
            return Response(status_code=200)
        try:
            data = await self.read()
        except Exception:
            logger.error(
                "Could not serialize updated resource on %s", request.url.path,
                exc_info=True,
            )
            return Response(status_code=500)
        return Response(content=data, status_code=200, media_type=self.content_type)


class DeleteOperation:
    """DELETE: remove the resource.

    Args:
        delete: The resource's delete capability.
    """

    def __init__(self, delete: DeleteFn) -> None:
        self.delete = delete

    async def __call__(self, request: Request) -> Response:
        try:
            await self.delete()
        except Exception:
            logger.error("Delete failed on %s", request.url.path, exc_info=True)
            return PlainTextResponse(content=DELETE_FAILED_MESSAGE, status_code=500)
        return Response(status_code=200)
