"""Domain model package.

All domain objects are pure Python / Pydantic models with no ORM or
infrastructure dependencies.  Import from this package to avoid coupling
application code to individual module paths.
"""

from .entity import Entity, utc_now
from .enums import ObjectState, SortDirection
from .filters import (
    MATCH_ALL,
    AllOf,
    AnyOf,
    Condition,
    Expression,
    Filter,
    MatchAll,
    Operator,
    Where,
    any_of,
    where,
)
from .keys import (
    DEFAULT_KEY_FIELD,
    KeyDescriptor,
    PrimaryKey,
    register_key,
    resolve_key,
    resolve_key_field,
    unregister_key,
)
from .paging import ListResult, Page, PageWindow

__all__ = [
    "Entity",
    "utc_now",
    "ObjectState",
    "SortDirection",
    "MATCH_ALL",
    "AllOf",
    "AnyOf",
    "Condition",
    "Expression",
    "Filter",
    "MatchAll",
    "Operator",
    "Where",
    "any_of",
    "where",
    "DEFAULT_KEY_FIELD",
    "KeyDescriptor",
    "PrimaryKey",
    "register_key",
    "resolve_key",
    "resolve_key_field",
    "unregister_key",
    "ListResult",
    "Page",
    "PageWindow",
]
