"""Domain enumerations for crudcore.

All string-valued enums use str mixin so they serialize cleanly to JSON
and remain comparable to plain strings (Pydantic default behaviour).
"""

from __future__ import annotations

from enum import Enum


class ObjectState(str, Enum):
    """Pending mutation intent declared by the caller before persist."""

    UNCHANGED = "unchanged"
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, raw: str) -> SortDirection:
        """Case-insensitive lookup; raises ValueError for anything but ASC/DESC."""
        return cls(raw.strip().upper())
