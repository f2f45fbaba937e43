"""Generic SQLAlchemy implementation of Repository.

A concrete repository only names its ORM model and domain type:

    class SqlProductRepository(SqlRepository[Product]):
        model = ProductRow
        entity_type = Product

Rows are mapped to entities by shared field names (override _to_domain /
_to_values when the shapes differ).  Reads select ORM rows with
populate_existing.  Writes are Core INSERT / UPDATE / DELETE statements;
updates and deletes carry the concurrency token in their WHERE clause.

The query timeout is enforced client-side with asyncio.wait_for; on expiry
the session is rolled back before QueryTimeoutError is raised.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, ClassVar, TypeVar
from uuid import uuid4

from sqlalchemy import (
    ColumnElement,
    Select,
    and_,
    delete,
    exists,
    false,
    func,
    insert,
    inspect as sa_inspect,
    or_,
    select,
    true,
    update,
)
from sqlalchemy.exc import MultipleResultsFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from crudcore.domain.exceptions import (
    AmbiguousMatchError,
    ConcurrencyConflictError,
    CrudCoreError,
    DataAccessError,
    EntityNotFoundError,
    ParameterValidationError,
    QueryTimeoutError,
    UnknownSortColumnError,
)
from crudcore.domain.models.entity import Entity, utc_now
from crudcore.domain.models.enums import ObjectState, SortDirection
from crudcore.domain.models.filters import (
    AllOf,
    AnyOf,
    Condition,
    Expression,
    Filter,
    MatchAll,
    Operator,
    Where,
)
from crudcore.domain.models.keys import resolve_key_field
from crudcore.domain.models.paging import Page, PageWindow
from crudcore.domain.repositories.base import Repository
from crudcore.infrastructure.database import Base, settings
from crudcore.infrastructure.persistence.models import CONCURRENCY_TOKEN_BYTES

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Entity)

# Never rewritten by an update.
_IMMUTABLE_FIELDS = frozenset({"created_at"})


def new_concurrency_token() -> bytes:
    return uuid4().bytes[:CONCURRENCY_TOKEN_BYTES]


def to_pascal(name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in name.split("_"))


class SqlRepository(Repository[T]):
    model: ClassVar[type[Base]]
    entity_type: ClassVar[type[Entity]]
    # Accepted sort names → ORM attribute names.  None accepts every column
    # by its attribute name and its PascalCase form.
    sort_columns: ClassVar[Mapping[str, str] | None] = None

    def __init__(self, session: AsyncSession, query_timeout: float | None = None) -> None:
        self._session = session
        self._query_timeout = (
            query_timeout if query_timeout is not None else settings.query_timeout_seconds
        )

    # ------------------------------------------------------------------ #
    # Mapping                                                              #
    # ------------------------------------------------------------------ #

    @classmethod
    def column_names(cls) -> list[str]:
        return [attr.key for attr in sa_inspect(cls.model).column_attrs]

    @classmethod
    def key_field(cls) -> str:
        return resolve_key_field(cls.entity_type)

    def _to_domain(self, row: Any) -> T:
        columns = set(self.column_names())
        data = {
            name: getattr(row, name)
            for name in self.entity_type.model_fields
            if name in columns
        }
        return self.entity_type.model_validate(data)  # type: ignore[return-value]

    def _to_values(self, entity: T) -> dict[str, Any]:
        fields = type(entity).model_fields
        return {name: getattr(entity, name) for name in self.column_names() if name in fields}

    def _attribute(self, name: str) -> Any:
        if name not in self.column_names():
            raise ParameterValidationError(
                f"{self.model.__name__} has no column {name!r}"
            )
        return getattr(self.model, name)

    def _table_column(self, name: str) -> Any:
        return sa_inspect(self.model).columns[name]

    # ------------------------------------------------------------------ #
    # Execution                                                            #
    # ------------------------------------------------------------------ #

    async def _execute(self, stmt: Any) -> Any:
        try:
            if self._query_timeout:
                return await asyncio.wait_for(
                    self._session.execute(stmt), timeout=self._query_timeout
                )
            return await self._session.execute(stmt)
        except asyncio.TimeoutError as exc:
            logger.warning(
                "%s query exceeded %ss timeout", self.model.__name__, self._query_timeout
            )
            # The cancelled statement may leave the transaction half-open.
            await self._session.rollback()
            raise QueryTimeoutError(
                f"Query on {self.model.__name__} exceeded {self._query_timeout}s"
            ) from exc
        except SQLAlchemyError as exc:
            raise DataAccessError(f"Query on {self.model.__name__} failed: {exc}") from exc

    def _select(self) -> Select[Any]:
        return select(self.model).execution_options(populate_existing=True)

    # ------------------------------------------------------------------ #
    # Filters and sorting                                                  #
    # ------------------------------------------------------------------ #

    def _apply_filter(self, stmt: Select[Any], search_filter: Filter | None) -> Select[Any]:
        if search_filter is None or isinstance(search_filter, MatchAll):
            return stmt
        if isinstance(search_filter, Where):
            return stmt.where(self._compile(search_filter.expression))
        raise ParameterValidationError(f"Unsupported filter {search_filter!r}")

    def _compile(self, expression: Expression) -> ColumnElement[bool]:
        if isinstance(expression, AnyOf):
            clauses = [self._compile(term) for term in expression.terms]
            return or_(*clauses) if clauses else false()
        if isinstance(expression, AllOf):
            clauses = [self._compile(term) for term in expression.terms]
            return and_(*clauses) if clauses else true()
        if isinstance(expression, Condition):
            return self._compile_condition(expression)
        raise ParameterValidationError(f"Unsupported filter expression {expression!r}")

    def _compile_condition(self, condition: Condition) -> ColumnElement[bool]:
        column = self._attribute(condition.field)
        value = condition.value
        op = condition.op
        if op is Operator.EQ:
            return column == value
        if op is Operator.NE:
            return column != value
        if op is Operator.LT:
            return column < value
        if op is Operator.LE:
            return column <= value
        if op is Operator.GT:
            return column > value
        if op is Operator.GE:
            return column >= value
        if op in (Operator.CONTAINS, Operator.STARTS_WITH):
            if not isinstance(value, str):
                raise ParameterValidationError(
                    f"{op.value} on {condition.field!r} needs a string, got {value!r}"
                )
            if op is Operator.CONTAINS:
                return column.icontains(value, autoescape=True)
            return column.istartswith(value, autoescape=True)
        if op is Operator.IN:
            if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
                raise ParameterValidationError(
                    f"in on {condition.field!r} needs a collection, got {value!r}"
                )
            return column.in_(list(value))
        if op is Operator.IS_NULL:
            if value is not None and not isinstance(value, bool):
                raise ParameterValidationError(
                    f"is_null on {condition.field!r} needs True, False or None, got {value!r}"
                )
            return column.is_(None) if value in (None, True) else column.is_not(None)
        raise ParameterValidationError(f"Unsupported operator {op!r}")

    @classmethod
    def sortable_columns(cls) -> dict[str, str]:
        if cls.sort_columns is not None:
            return dict(cls.sort_columns)
        mapping: dict[str, str] = {}
        for name in cls.column_names():
            mapping[name] = name
            mapping[to_pascal(name)] = name
        return mapping

    def _order_by(self, sort_column: str, sort_direction: str) -> list[Any]:
        attribute_name = self.sortable_columns().get(sort_column)
        if attribute_name is None:
            raise UnknownSortColumnError(
                f"{sort_column!r} is not a sortable column of {self.model.__name__}"
            )
        try:
            direction = SortDirection.parse(sort_direction)
        except ValueError as exc:
            raise ParameterValidationError(
                f"Sort direction must be ASC or DESC, got {sort_direction!r}"
            ) from exc

        column = getattr(self.model, attribute_name)
        ordering = [column.asc() if direction is SortDirection.ASC else column.desc()]
        if attribute_name != self.key_field():
            # Stable pages for duplicate sort values.
            ordering.append(getattr(self.model, self.key_field()).asc())
        return ordering

    # ------------------------------------------------------------------ #
    # Queries                                                              #
    # ------------------------------------------------------------------ #

    async def find_by_id(self, id: int) -> T | None:
        stmt = self._select().where(self._attribute(self.key_field()) == id)
        row = (await self._execute(stmt)).scalar_one_or_none()
        return self._to_domain(row) if row is not None else None

    async def find_by_external_id(self, external_id: str) -> T | None:
        stmt = self._select().where(self._attribute("external_id") == external_id)
        row = (await self._execute(stmt)).scalar_one_or_none()
        return self._to_domain(row) if row is not None else None

    async def find_by_predicate(self, predicate: Filter) -> T | None:
        result = await self._execute(self._apply_filter(self._select(), predicate))
        try:
            row = result.scalar_one_or_none()
        except MultipleResultsFound as exc:
            raise AmbiguousMatchError(
                f"More than one {self.entity_type.__name__} matches {predicate!r}"
            ) from exc
        return self._to_domain(row) if row is not None else None

    async def find_all_by_predicate(self, predicate: Filter) -> list[T]:
        result = await self._execute(self._apply_filter(self._select(), predicate))
        return [self._to_domain(row) for row in result.scalars().all()]

    async def find_all(self) -> list[T]:
        result = await self._execute(self._select())
        return [self._to_domain(row) for row in result.scalars().all()]

    async def exists(self, id: int) -> bool:
        stmt = select(exists().where(self._attribute(self.key_field()) == id))
        return bool((await self._execute(stmt)).scalar())

    async def find_all_by_criteria(
        self,
        page_number: int | None,
        page_size: int | None,
        sort_column: str | None,
        sort_direction: str | None,
        search_filter: Filter | None = None,
    ) -> Page[T]:
        if sort_column is None or not sort_column.strip():
            raise ParameterValidationError("sort_column is required")
        if sort_direction is None or not sort_direction.strip():
            raise ParameterValidationError("sort_direction is required")

        window = PageWindow.resolve(page_number, page_size)
        ordering = self._order_by(sort_column, sort_direction)
        filtered = self._apply_filter(self._select(), search_filter)

        count_stmt = select(func.count()).select_from(filtered.subquery())
        total = (await self._execute(count_stmt)).scalar_one()

        page_stmt = filtered.order_by(*ordering).offset(window.skip).limit(window.size_of_page)
        rows = (await self._execute(page_stmt)).scalars().all()
        return Page(items=[self._to_domain(row) for row in rows], total_records=total)

    # ------------------------------------------------------------------ #
    # Persist                                                              #
    # ------------------------------------------------------------------ #

    async def persist(self, entity: T) -> bool:
        """Write entity in its own transaction and reset it to UNCHANGED.

        Insert when the key is zero and the state is ADDED, delete when the
        state is DELETED, update otherwise.  Generated values (key, token,
        modified_at) are copied onto entity only after the commit succeeds.
        """
        now = utc_now()
        key = self.key_field()
        state = entity.object_state
        try:
            if state is ObjectState.ADDED and not getattr(entity, key):
                generated = await self._insert(entity, key, now)
            elif state is ObjectState.DELETED:
                generated = await self._delete(entity, key)
            else:
                generated = await self._update(entity, key, now)
            await self._session.commit()
        except CrudCoreError:
            await self._session.rollback()
            raise
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise DataAccessError(
                f"Failed to persist {type(entity).__name__}: {exc}"
            ) from exc

        for name, value in generated.items():
            setattr(entity, name, value)
        entity.modified_at = now
        entity.object_state = ObjectState.UNCHANGED
        logger.debug(
            "Persisted %s %s=%s (%s)", type(entity).__name__, key, getattr(entity, key), state.value
        )
        return True

    async def _insert(self, entity: T, key: str, now: datetime) -> dict[str, Any]:
        token = new_concurrency_token()
        values = self._to_values(entity)
        values["modified_at"] = now
        values["concurrency_token"] = token
        if not values.get(key):
            values.pop(key, None)
        key_column = self._table_column(key)
        stmt = (
            insert(self.model.__table__)
            .values({self._table_column(name): value for name, value in values.items()})
            .returning(key_column)
        )
        new_key = (await self._execute(stmt)).scalar_one()
        return {key: new_key, "concurrency_token": token}

    async def _update(self, entity: T, key: str, now: datetime) -> dict[str, Any]:
        token = new_concurrency_token()
        values = {
            name: value
            for name, value in self._to_values(entity).items()
            if name != key and name not in _IMMUTABLE_FIELDS
        }
        values["modified_at"] = now
        values["concurrency_token"] = token
        stmt = (
            update(self.model.__table__)
            .where(self._guard(entity, key))
            .values({self._table_column(name): value for name, value in values.items()})
        )
        result = await self._execute(stmt)
        if result.rowcount == 0:
            await self._raise_write_conflict(entity, key)
        return {"concurrency_token": token}

    async def _delete(self, entity: T, key: str) -> dict[str, Any]:
        stmt = delete(self.model.__table__).where(self._guard(entity, key))
        result = await self._execute(stmt)
        if result.rowcount == 0:
            await self._raise_write_conflict(entity, key)
        return {}

    def _guard(self, entity: T, key: str) -> ColumnElement[bool]:
        return and_(
            self._table_column(key) == getattr(entity, key),
            self._table_column("concurrency_token") == entity.concurrency_token,
        )

    async def _raise_write_conflict(self, entity: T, key: str) -> None:
        key_value = getattr(entity, key)
        name = type(entity).__name__
        if await self.exists(key_value):
            logger.warning("Concurrency conflict persisting %s %s=%s", name, key, key_value)
            raise ConcurrencyConflictError(
                f"{name} {key}={key_value} was changed by another writer"
            )
        raise EntityNotFoundError(f"{name} {key}={key_value} does not exist")
