"""Generic repository base interface.

Repository[T] is the root abstraction for data access in this package.
Concrete implementations live in crudcore/infrastructure/persistence/ and
are wired at the application boundary.

Design notes:
  - All methods are async to accommodate async database drivers (asyncpg / SQLAlchemy async).
  - T is the domain model type (an Entity subclass, never an ORM row).
  - find_* return None when nothing matches; find_by_predicate raises
    AmbiguousMatchError instead of picking one of several matches.
  - Filters are declarative (crudcore.domain.models.filters) so no query
    language leaks into the business layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from crudcore.domain.models.entity import Entity
from crudcore.domain.models.filters import Filter
from crudcore.domain.models.paging import Page

T = TypeVar("T", bound=Entity)


class Repository(ABC, Generic[T]):
    """Abstract data-access interface for one entity type."""

    @abstractmethod
    async def find_by_id(self, id: int) -> T | None:
        """Return the entity whose key field equals id, or None."""

    @abstractmethod
    async def find_by_external_id(self, external_id: str) -> T | None:
        """Return the entity with the given string identifier, or None."""

    @abstractmethod
    async def find_by_predicate(self, predicate: Filter) -> T | None:
        """Return the single match, None for no match; raise AmbiguousMatchError for several."""

    @abstractmethod
    async def find_all_by_predicate(self, predicate: Filter) -> list[T]:
        """Return every match, in no particular order."""

    @abstractmethod
    async def find_all(self) -> list[T]:
        """Return every stored entity, in no particular order."""

    @abstractmethod
    async def exists(self, id: int) -> bool:
        """Return True if an entity with the given key exists."""

    @abstractmethod
    async def find_all_by_criteria(
        self,
        page_number: int | None,
        page_size: int | None,
        sort_column: str | None,
        sort_direction: str | None,
        search_filter: Filter | None = None,
    ) -> Page[T]:
        """Return one sorted page of the filtered set and the filtered total.

        search_filter=None means no filtering.  Raises ParameterValidationError
        for a blank sort column or direction.
        """

    @abstractmethod
    async def persist(self, entity: T) -> bool:
        """Insert, update or delete entity according to its object_state.

        Returns True on success; store failures raise DataAccessError.
        """
