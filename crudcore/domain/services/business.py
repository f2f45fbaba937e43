"""Generic business layer.

EntityBusiness[T] is a thin orchestration layer over a Repository[T]:
listing with paging metadata, plus pass-through lookup and persist.  It
never mutates entity fields itself.

Per-entity subclasses override build_search_filter() to turn keywords into
a real filter; the base implementation does not filter at all.

Pipeline for list_items:
    default sort inputs
        → split_search_terms
        → build_search_filter
        → Repository.find_all_by_criteria
        → ListResult (offsets, page count, echoed inputs)
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Generic, TypeVar

from crudcore.domain.models.entity import Entity
from crudcore.domain.models.filters import MATCH_ALL, Filter
from crudcore.domain.models.paging import ListResult, PageWindow
from crudcore.domain.repositories.base import Repository
from crudcore.domain.services.mapping import copy_fields, map_to

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Entity)


def split_search_terms(search_terms: str | None) -> list[str]:
    """Split on commas without trimming.  None or blank input gives []."""
    if search_terms is None or not search_terms.strip():
        return []
    return search_terms.split(",")


class EntityBusiness(Generic[T]):
    default_sort_column: ClassVar[str] = "Name"
    default_sort_direction: ClassVar[str] = "ASC"

    def __init__(self, repository: Repository[T]) -> None:
        self._repository = repository

    @property
    def repository(self) -> Repository[T]:
        return self._repository

    async def list_items(
        self,
        page_number: int | None = None,
        page_size: int | None = None,
        sort_col: str | None = None,
        sort_dir: str | None = None,
        search_terms: str | None = None,
    ) -> ListResult[T]:
        sort_col = sort_col if sort_col and sort_col.strip() else self.default_sort_column
        sort_dir = sort_dir if sort_dir and sort_dir.strip() else self.default_sort_direction
        keywords = split_search_terms(search_terms)
        search_filter = self.build_search_filter(keywords)

        window = PageWindow.resolve(page_number, page_size)
        page = await self._repository.find_all_by_criteria(
            window.page_index,
            window.size_of_page,
            sort_col,
            sort_dir,
            search_filter,
        )
        total = page.total_records
        logger.debug(
            "Listed %d of %d records (page %d, size %d, sort %s %s)",
            len(page.items),
            total,
            window.page_index,
            window.size_of_page,
            sort_col,
            sort_dir,
        )

        return ListResult(
            keywords=keywords,
            items=page.items,
            sort_col=sort_col,
            sort_dir=sort_dir,
            offset=window.offset,
            page_index=window.page_index,
            size_of_page=window.size_of_page,
            offset_upper_bound=window.offset_upper_bound(total),
            total_number_of_records=total,
            total_number_of_pages=window.total_pages(total),
            search_terms=",".join(keywords),
        )

    def build_search_filter(self, keywords: list[str]) -> Filter:
        """Return the filter for keywords.  Override per entity type."""
        return MATCH_ALL

    async def find_entity_by_id(self, id: int) -> T | None:
        return await self._repository.find_by_id(id)

    async def persist_entity(self, entity: T) -> bool:
        return await self._repository.persist(entity)

    @staticmethod
    def map_fields(source: Any, destination: Any, **kwargs: Any) -> Any:
        """Shallow-copy matching fields; destination may be an instance or a type."""
        if isinstance(destination, type):
            return map_to(source, destination, **kwargs)
        return copy_fields(source, destination, **kwargs)
