"""Primary-key resolution for entity types.

The conventional key field is ``id``.  An entity type can name a different
integer key in one of two ways:

  - explicitly, by registering a KeyDescriptor for the type at start-up;
  - declaratively, by annotating exactly one integer field with PrimaryKey:

        class Invoice(Entity):
            invoice_no: Annotated[int, PrimaryKey()] = 0

Field metadata does not change at runtime, so inspection results are cached
per type.  register_key() clears the cache.
"""

from __future__ import annotations

import types
import typing
from dataclasses import dataclass
from functools import lru_cache

from pydantic import BaseModel

DEFAULT_KEY_FIELD = "id"


@dataclass(frozen=True)
class PrimaryKey:
    """Annotated marker tagging a model field as the primary key."""


@dataclass(frozen=True)
class KeyDescriptor:
    field_name: str
    field_type: type = int


_registry: dict[type[BaseModel], KeyDescriptor] = {}


def register_key(entity_type: type[BaseModel], descriptor: KeyDescriptor) -> None:
    """Declare the key field of entity_type, overriding any annotation."""
    if descriptor.field_name not in entity_type.model_fields:
        raise ValueError(
            f"{entity_type.__name__} has no field named {descriptor.field_name!r}"
        )
    _registry[entity_type] = descriptor
    _inspect_key.cache_clear()


def unregister_key(entity_type: type[BaseModel]) -> None:
    _registry.pop(entity_type, None)
    _inspect_key.cache_clear()


def resolve_key(entity_type: type[BaseModel]) -> KeyDescriptor:
    registered = _registry.get(entity_type)
    if registered is not None:
        return registered
    return _inspect_key(entity_type)


def resolve_key_field(entity_type: type[BaseModel]) -> str:
    """Return the name of the field that holds entity_type's primary key."""
    return resolve_key(entity_type).field_name


def _is_integral(annotation: object) -> bool:
    # Optional[int] counts; bool is an int subclass but never a key.
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        return len(args) == 1 and _is_integral(args[0])
    return isinstance(annotation, type) and issubclass(annotation, int) and annotation is not bool


@lru_cache(maxsize=None)
def _inspect_key(entity_type: type[BaseModel]) -> KeyDescriptor:
    tagged = [
        name
        for name, info in entity_type.model_fields.items()
        if any(isinstance(m, PrimaryKey) for m in info.metadata)
        and _is_integral(info.annotation)
    ]
    if len(tagged) == 1:
        return KeyDescriptor(field_name=tagged[0])
    return KeyDescriptor(field_name=DEFAULT_KEY_FIELD)
