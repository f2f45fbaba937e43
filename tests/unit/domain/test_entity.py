"""Tests for crudcore/domain/models/entity.py."""

from datetime import timezone
from typing import Self, get_type_hints

from crudcore.domain.models.entity import Entity
from crudcore.domain.models.enums import ObjectState
from tests.catalog import Product


def test_entity_defaults():
    entity = Entity()
    assert entity.id == 0
    assert entity.object_state is ObjectState.UNCHANGED
    assert entity.concurrency_token is None
    assert entity.is_deleted is None


def test_external_id_is_unique_per_instance():
    assert Entity().external_id != Entity().external_id


def test_timestamps_are_utc():
    entity = Entity()
    assert entity.created_at.tzinfo == timezone.utc
    assert entity.modified_at.tzinfo == timezone.utc


def test_new_marks_entity_added():
    product = Product.new(name="Lamp")
    assert type(product) is Product
    assert product.object_state is ObjectState.ADDED
    assert product.name == "Lamp"


def test_new_is_typed_as_the_calling_class():
    assert get_type_hints(Entity.new)["return"] is Self


def test_mark_modified_and_deleted():
    product = Product(name="Lamp")
    product.mark_modified()
    assert product.object_state is ObjectState.MODIFIED
    product.mark_deleted()
    assert product.object_state is ObjectState.DELETED


def test_entity_is_mutable():
    product = Product(name="Lamp")
    product.name = "Desk lamp"
    assert product.name == "Desk lamp"
