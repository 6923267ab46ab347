"""Error types raised by resource capabilities.

Capabilities signal failure by raising. The operation layer distinguishes
two kinds of failure:

- ``FieldErrors`` -- a structured, field-addressable validation failure,
  always rendered as a JSON object (``{"age": "Too old"}``).
- ``ResourceError`` (or any other exception) -- a generic failure rendered
  as a plain-text message.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

import pydantic_core
from pydantic import ValidationError


class ResourceError(Exception):
    """Generic capability failure carrying a plain-text message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FieldErrors(ResourceError):
    """A set of validation messages keyed by field name.

    An empty set is still a validation failure and serializes to ``{}``.
    Instances are created per validation attempt and never persisted.

    Args:
        errors: Optional initial mapping of field name to message.
    """

    def __init__(self, errors: Mapping[str, str] | None = None) -> None:
        self.errors: dict[str, str] = dict(errors or {})
        super().__init__(self.to_json().decode())

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> FieldErrors:
        """Build field errors from a pydantic ``ValidationError``.

        Nested locations are joined with dots (``owner.name``). When several
        errors share a location, the first message wins.
        """
        field_errors = cls()
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "__root__"
            if field not in field_errors:
                field_errors.add(field, error["msg"])
        return field_errors

    def add(self, field: str, message: str) -> None:
        """Record ``message`` for ``field``, replacing any previous message."""
        self.errors[field] = message
        self.message = self.to_json().decode()
        self.args = (self.message,)

    def to_dict(self) -> dict[str, str]:
        return dict(self.errors)

    def to_json(self) -> bytes:
        """Serialize as a compact JSON object."""
        return pydantic_core.to_json(self.errors)

    def __contains__(self, field: object) -> bool:
        return field in self.errors

    def __iter__(self) -> Iterator[str]:
        return iter(self.errors)

    def __str__(self) -> str:
        return self.to_json().decode()

    def __repr__(self) -> str:
        return f"FieldErrors({self.errors!r})"
