"""FieldErrors -- verifies serialization and the error type hierarchy.

Tests:
    - Empty set serializes to {} and is still an exception
    - add() records and replaces messages
    - Conversion from pydantic ValidationError keys by dotted location
"""

import pytest
from pydantic import BaseModel, ValidationError

from caprest.errors import FieldErrors, ResourceError


def test_empty_field_errors_serialize_to_empty_object():
    assert FieldErrors().to_json() == b"{}"
    assert str(FieldErrors()) == "{}"


def test_added_field_serializes_as_json_object():
    errors = FieldErrors()
    errors.add("age", "Too old")
    assert errors.to_json() == b'{"age":"Too old"}'
    assert str(errors) == '{"age":"Too old"}'


def test_add_replaces_existing_message():
    errors = FieldErrors({"name": "required"})
    errors.add("name", "invalid")
    assert errors.to_dict() == {"name": "invalid"}


def test_field_errors_are_truthy_even_when_empty():
    # An empty set is still a failure; callers must not skip raising it
    assert bool(FieldErrors())


def test_membership_and_iteration():
    errors = FieldErrors({"age": "Too old", "id": "required"})
    assert "age" in errors
    assert "name" not in errors
    assert set(errors) == {"age", "id"}


def test_field_errors_are_resource_errors():
    with pytest.raises(ResourceError):
        raise FieldErrors({"age": "Too old"})


def test_resource_error_keeps_message():
    exc = ResourceError("malformed JSON body")
    assert exc.message == "malformed JSON body"
    assert str(exc) == "malformed JSON body"


class _Owner(BaseModel):
    name: str


class _Pet(BaseModel):
    age: int
    owner: _Owner


def test_from_validation_error_uses_dotted_locations():
    with pytest.raises(ValidationError) as info:
        _Pet.model_validate({"age": "old", "owner": {}})

    errors = FieldErrors.from_validation_error(info.value)

    assert set(errors) == {"age", "owner.name"}
    assert errors.to_dict()["owner.name"] == "Field required"
