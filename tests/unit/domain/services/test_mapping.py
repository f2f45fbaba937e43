"""Tests for crudcore/domain/services/mapping.py."""

from dataclasses import dataclass
from types import SimpleNamespace

import pytest
from pydantic import BaseModel

from crudcore.domain.services.mapping import copy_fields, map_to
from tests.catalog import Product


class _ProductSummary(BaseModel):
    name: str = ""
    price: float = 0.0
    colour: int | None = None


@dataclass
class _ProductForm:
    name: str
    colour: str
    price: float = 0.0
    notes: str = ""


def test_map_to_copies_matching_compatible_fields():
    product = Product(name="Lamp", colour="red", price=12.5)
    summary = map_to(product, _ProductSummary)
    assert summary.name == "Lamp"
    assert summary.price == 12.5


def test_map_to_skips_fields_with_incompatible_types():
    summary = map_to(Product(name="Lamp", colour="red"), _ProductSummary)
    assert summary.colour is None


def test_map_to_accepts_extra_values():
    form = map_to(Product(name="Lamp", colour="red"), _ProductForm, notes="from catalog")
    assert form == _ProductForm(name="Lamp", colour="red", price=0.0, notes="from catalog")


def test_map_to_honours_exclude():
    summary = map_to(Product(name="Lamp", price=3.0), _ProductSummary, exclude=["price"])
    assert summary.price == 0.0


def test_int_is_accepted_for_float_fields():
    summary = map_to(SimpleNamespace(name="Lamp", price=3), _ProductSummary)
    assert summary.price == 3


def test_copy_fields_updates_destination_in_place():
    form = _ProductForm(name="Desk lamp", colour="blue", price=20.0)
    product = Product(name="Lamp", colour="red")
    returned = copy_fields(form, product)
    assert returned is product
    assert (product.name, product.colour, product.price) == ("Desk lamp", "blue", 20.0)
    assert not hasattr(product, "notes")


def test_copy_fields_leaves_unmatched_fields_alone():
    product = Product(name="Lamp", colour="red", price=1.0)
    copy_fields(SimpleNamespace(name="Desk lamp"), product)
    assert product.colour == "red"


def test_map_to_rejects_unsupported_target():
    with pytest.raises(TypeError):
        map_to(Product(), dict)
