"""Dispatcher -- verifies verb-to-capability selection.

Tests:
    - Each verb selects its operation only when the capability exists
    - OPTIONS and unknown verbs never select anything
    - A resource with no capabilities selects nothing for every verb
    - MethodTable can carry an OPTIONS handler supplied by hand
"""

import pytest

from caprest.dispatcher import MethodTable, select_operation
from caprest.operations import (
    CreateOperation,
    DeleteOperation,
    ReadOperation,
    UpdateOperation,
)
from caprest.resource import Capabilities, Resource, ResourceDescriptor


async def _read() -> bytes:
    return b"{}"


async def _create(body: bytes) -> Resource:
    return Resource()


async def _update(body: bytes) -> None:
    return None


async def _delete() -> None:
    return None


FULL = ResourceDescriptor(
    capabilities=Capabilities(
        read=_read,
        create=_create,
        update=_update,
        partial_update=_update,
        delete=_delete,
    )
)
EMPTY = ResourceDescriptor()

ALL_VERBS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD", "TRACE", "BREW"]


@pytest.mark.parametrize(
    ("method", "operation_cls"),
    [
        ("GET", ReadOperation),
        ("POST", CreateOperation),
        ("PUT", UpdateOperation),
        ("PATCH", UpdateOperation),
        ("DELETE", DeleteOperation),
    ],
)
def test_verb_selects_matching_operation(method, operation_cls):
    assert isinstance(select_operation(FULL, method), operation_cls)


@pytest.mark.parametrize("method", ["OPTIONS", "HEAD", "BREW", "get"])
def test_options_and_unknown_verbs_select_nothing(method):
    assert select_operation(FULL, method) is None


@pytest.mark.parametrize("method", ALL_VERBS)
def test_resource_without_capabilities_selects_nothing(method):
    assert select_operation(EMPTY, method) is None


def test_missing_capability_selects_nothing():
    read_only = ResourceDescriptor(capabilities=Capabilities(read=_read))
    assert select_operation(read_only, "GET") is not None
    for method in ["POST", "PUT", "PATCH", "DELETE"]:
        assert select_operation(read_only, method) is None


def test_update_operations_close_over_read_capability():
    put = select_operation(FULL, "PUT")
    patch = select_operation(FULL, "PATCH")
    assert put.read is _read
    assert patch.read is _read

    write_only = ResourceDescriptor(capabilities=Capabilities(update=_update))
    assert select_operation(write_only, "PUT").read is None


def test_operations_use_declared_content_type():
    csv = ResourceDescriptor(
        content_type="text/csv", capabilities=Capabilities(read=_read),
    )
    assert select_operation(csv, "GET").content_type == "text/csv"


def test_selection_does_not_change_resource():
    before = FULL.capabilities
    select_operation(FULL, "GET")
    select_operation(FULL, "DELETE")
    assert FULL.capabilities is before


def test_method_table_reports_allowed_methods():
    table = MethodTable.for_resource(FULL)
    assert table.options is None
    assert table.allowed_methods() == ["GET", "POST", "PUT", "PATCH", "DELETE"]


def test_hand_built_method_table_can_answer_options():
    async def options(request):
        return None

    table = MethodTable(options=options)
    assert table.lookup("OPTIONS") is options
    assert table.lookup("GET") is None
    assert table.allowed_methods() == ["OPTIONS"]
