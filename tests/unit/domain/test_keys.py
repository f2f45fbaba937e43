"""Tests for crudcore/domain/models/keys.py."""

from typing import Annotated, Optional

import pytest

from crudcore.domain.models.entity import Entity
from crudcore.domain.models.keys import (
    KeyDescriptor,
    PrimaryKey,
    register_key,
    resolve_key,
    resolve_key_field,
    unregister_key,
)
from tests.catalog import Invoice, Product


class _Ticket(Entity):
    ticket_no: Annotated[Optional[int], PrimaryKey()] = None


class _TwoKeys(Entity):
    a: Annotated[int, PrimaryKey()] = 0
    b: Annotated[int, PrimaryKey()] = 0


class _StringKey(Entity):
    code: Annotated[str, PrimaryKey()] = ""


class _BoolKey(Entity):
    flag: Annotated[bool, PrimaryKey()] = False


class _Registered(Entity):
    serial: int = 0


def test_conventional_key_is_id():
    assert resolve_key_field(Product) == "id"


def test_annotated_integer_key_is_found():
    assert resolve_key_field(Invoice) == "invoice_no"


def test_optional_integer_key_is_found():
    assert resolve_key_field(_Ticket) == "ticket_no"


def test_more_than_one_tagged_field_falls_back_to_id():
    assert resolve_key_field(_TwoKeys) == "id"


def test_non_integral_tagged_field_falls_back_to_id():
    assert resolve_key_field(_StringKey) == "id"


def test_bool_is_not_an_integral_key():
    assert resolve_key_field(_BoolKey) == "id"


def test_resolution_is_cached_per_type():
    assert resolve_key(Invoice) is resolve_key(Invoice)


def test_registered_descriptor_wins_and_can_be_removed():
    register_key(_Registered, KeyDescriptor(field_name="serial"))
    try:
        assert resolve_key_field(_Registered) == "serial"
    finally:
        unregister_key(_Registered)
    assert resolve_key_field(_Registered) == "id"


def test_register_rejects_unknown_field():
    with pytest.raises(ValueError):
        register_key(_Registered, KeyDescriptor(field_name="nope"))
