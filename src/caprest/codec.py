"""JSON codec used by the generic resource adapters."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol, TypeVar

import pydantic_core
from pydantic import BaseModel, ValidationError

from caprest.errors import FieldErrors, ResourceError
from caprest.resource import JSON_CONTENT_TYPE

ModelT = TypeVar("ModelT", bound=BaseModel)


class Codec(Protocol):
    """Serializes objects for one content type and merges bodies onto models."""

    content_type: str

    def encode(self, value: Any) -> bytes: ...

    def encode_list(self, values: Iterable[Any]) -> bytes: ...

    def decode_onto(self, body: bytes, instance: ModelT) -> ModelT: ...


class JSONCodec:
    """JSON encoding via ``pydantic_core`` and merge-decoding via pydantic.

    Encoding accepts pydantic models, dataclasses and plain JSON values.
    Output is compact and deterministic, so encoding an unchanged object
    twice yields identical bytes.
    """

    content_type = JSON_CONTENT_TYPE

    def encode(self, value: Any) -> bytes:
        """Serialize ``value``.

        Raises:
            pydantic_core.PydanticSerializationError: If ``value`` contains
                something JSON cannot represent.
        """
        return pydantic_core.to_json(value)

    def encode_list(self, values: Iterable[Any]) -> bytes:
        return pydantic_core.to_json(list(values))

    def decode_onto(self, body: bytes, instance: ModelT) -> ModelT:
        """Merge a JSON object body onto a copy of ``instance``.

        Only fields present in the body change; unknown keys are ignored.
        ``instance`` itself is never modified.

        Args:
            body: Raw request body, expected to hold a JSON object.
            instance: The model the body is merged onto.

        Returns:
            A new model of the same type with the merged values.

        Raises:
            ResourceError: If the body is not valid JSON or not an object.
            FieldErrors: If the merged values fail the model's field types.
        """
        try:
            patch = pydantic_core.from_json(body)
        except ValueError as exc:
            raise ResourceError(f"malformed JSON body: {exc}") from exc
        if not isinstance(patch, dict):
            raise ResourceError("JSON body must be an object")

        model_cls = type(instance)
        try:
            merged = model_cls.model_validate({**instance.model_dump(), **patch})
        except ValidationError as exc:
            raise FieldErrors.from_validation_error(exc) from exc
        # model_copy keeps private attributes that model_validate would drop
        return instance.model_copy(update=dict(merged))
