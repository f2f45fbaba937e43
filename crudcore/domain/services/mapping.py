"""Shallow field copy between unrelated record shapes.

Fields are matched by name.  A value is copied only when it is compatible
with the destination field's declared type; anything else is left alone.
Nested models are copied by reference.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from typing import Any, Iterable, TypeVar

from pydantic import BaseModel

D = TypeVar("D")


def _source_values(source: Any) -> dict[str, Any]:
    if isinstance(source, BaseModel):
        return {name: getattr(source, name) for name in type(source).model_fields}
    if dataclasses.is_dataclass(source) and not isinstance(source, type):
        return {f.name: getattr(source, f.name) for f in dataclasses.fields(source)}
    return {k: v for k, v in vars(source).items() if not k.startswith("_")}


def _target_types(target_type: type) -> dict[str, Any]:
    if isinstance(target_type, type) and issubclass(target_type, BaseModel):
        return {name: info.annotation for name, info in target_type.model_fields.items()}
    if dataclasses.is_dataclass(target_type):
        hints = typing.get_type_hints(target_type)
        return {f.name: hints.get(f.name, Any) for f in dataclasses.fields(target_type)}
    raise TypeError(f"Cannot map onto {target_type!r}: not a pydantic model or dataclass")


def _accepts(annotation: Any, value: Any) -> bool:
    if annotation is Any or annotation is None:
        return True
    origin = typing.get_origin(annotation)
    if origin in (typing.Union, types.UnionType):
        return any(_accepts(arg, value) for arg in typing.get_args(annotation))
    if annotation is type(None):
        return value is None
    if origin is typing.Annotated:
        return _accepts(typing.get_args(annotation)[0], value)
    if origin is not None:
        # Parameterised generics (list[int], dict[str, X]): check the container only.
        return isinstance(origin, type) and isinstance(value, origin)
    if isinstance(annotation, type):
        if annotation is float and isinstance(value, int) and not isinstance(value, bool):
            return True
        return isinstance(value, annotation)
    return True


def _compatible(source: Any, target_type: type, exclude: Iterable[str]) -> dict[str, Any]:
    skipped = set(exclude)
    targets = _target_types(target_type)
    return {
        name: value
        for name, value in _source_values(source).items()
        if name in targets and name not in skipped and _accepts(targets[name], value)
    }


def copy_fields(source: Any, destination: D, *, exclude: Iterable[str] = ()) -> D:
    """Copy same-named, type-compatible field values onto destination in place."""
    for name, value in _compatible(source, type(destination), exclude).items():
        setattr(destination, name, value)
    return destination


def map_to(source: Any, target_type: type[D], *, exclude: Iterable[str] = (), **extra: Any) -> D:
    """Build a new target_type instance from source's matching fields.

    Keyword arguments in extra supply or override target fields.
    """
    values = _compatible(source, target_type, exclude)
    values.update(extra)
    return target_type(**values)
