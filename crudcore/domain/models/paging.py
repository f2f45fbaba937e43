"""Paging arithmetic and listing results."""

from __future__ import annotations

import math
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 10
# Used when a page size was supplied but is not positive.
FALLBACK_PAGE_SIZE = 5


class PageWindow(BaseModel):
    """Effective page index and size after defaulting and clamping.

    page_number None or <= 0 becomes 1.  page_size None becomes 10, while a
    supplied page_size <= 0 becomes 5: the two defaults are layered on
    purpose and must not be merged.
    """

    model_config = ConfigDict(frozen=True)

    page_index: int
    size_of_page: int

    @classmethod
    def resolve(cls, page_number: int | None, page_size: int | None) -> PageWindow:
        page_index = max(page_number if page_number is not None else DEFAULT_PAGE_NUMBER, 1)
        if page_size is None:
            size_of_page = DEFAULT_PAGE_SIZE
        elif page_size <= 0:
            size_of_page = FALLBACK_PAGE_SIZE
        else:
            size_of_page = page_size
        return cls(page_index=page_index, size_of_page=size_of_page)

    @property
    def skip(self) -> int:
        return self.size_of_page * (self.page_index - 1)

    @property
    def offset(self) -> int:
        """1-based position of the first record on this page."""
        return self.skip + 1

    def offset_upper_bound(self, total_records: int) -> int:
        """1-based position of the last record on this page, clamped to the total."""
        return min(self.offset + self.size_of_page - 1, total_records)

    def total_pages(self, total_records: int) -> int:
        return math.ceil(total_records / self.size_of_page)


class Page(BaseModel, Generic[T]):
    """One page of a filtered, sorted listing plus the unpaged match count."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    items: list[T]
    total_records: int


class ListResult(BaseModel, Generic[T]):
    """Result bundle returned by EntityBusiness.list_items().

    as_mapping() renders the caller-facing keys (sortCol, pageIndex, ...).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    keywords: list[str]
    items: list[T] = Field(alias="list")
    sort_col: str
    sort_dir: str
    offset: int
    page_index: int
    size_of_page: int
    offset_upper_bound: int
    total_number_of_records: int
    total_number_of_pages: int
    search_terms: str

    def as_mapping(self) -> dict[str, Any]:
        # Entities stay model instances rather than dumped dicts.
        return {
            (info.alias or name): getattr(self, name)
            for name, info in type(self).model_fields.items()
        }
