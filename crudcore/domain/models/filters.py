"""Search filters.

A Filter is either MatchAll (no filtering) or Where(expression).  An empty
AnyOf matches nothing and is never treated as MatchAll.

Expressions are declarative and name entity fields as strings; repositories
validate the names and compile the tree into their own query language.

    Where(Condition(field="name", op=Operator.CONTAINS, value="red")
          | Condition(field="name", op=Operator.CONTAINS, value="blue"))
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict


class Operator(str, Enum):
    EQ = "eq"
    NE = "ne"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"
    CONTAINS = "contains"  # case-insensitive substring
    STARTS_WITH = "starts_with"  # case-insensitive prefix
    IN = "in"
    IS_NULL = "is_null"


class _Combinable(BaseModel):
    model_config = ConfigDict(frozen=True)

    def __or__(self, other: Expression) -> AnyOf:
        return AnyOf(terms=(self, other))

    def __and__(self, other: Expression) -> AllOf:
        return AllOf(terms=(self, other))


class Condition(_Combinable):
    field: str
    op: Operator = Operator.EQ
    value: Any = None


class AnyOf(_Combinable):
    """Disjunction.  With no terms it matches nothing."""

    terms: tuple[Expression, ...] = ()


class AllOf(_Combinable):
    """Conjunction.  With no terms it matches everything."""

    terms: tuple[Expression, ...] = ()


Expression = Union[Condition, AnyOf, AllOf]

AnyOf.model_rebuild()
AllOf.model_rebuild()


class MatchAll(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["all"] = "all"


class Where(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["where"] = "where"
    expression: Expression


Filter = Union[MatchAll, Where]

MATCH_ALL = MatchAll()


def where(*conditions: Expression) -> Where:
    """Build a Where filter; several conditions are combined with AllOf."""
    if len(conditions) == 1:
        return Where(expression=conditions[0])
    return Where(expression=AllOf(terms=conditions))


def any_of(*conditions: Expression) -> Where:
    return Where(expression=AnyOf(terms=conditions))
