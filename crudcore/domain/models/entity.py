"""Entity base model.

Pure domain object with no ORM concerns.  Unlike most pydantic models in
this package, entities are mutable: the repository writes the assigned key,
modified_at, the concurrency token and the lifecycle state back onto the
instance the caller passed to persist().
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Self
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from .enums import ObjectState


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Entity(BaseModel):
    """Base for every persisted record.

    id is the conventional surrogate key.  An entity type may declare a
    differently-named integer key instead (see keys.PrimaryKey); id then
    stays at its zero value and is ignored by the repository.

    object_state is never stored.  It tells persist() whether to insert,
    update or delete, and is reset to UNCHANGED after a successful commit.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int = 0
    external_id: str = Field(default_factory=lambda: str(uuid4()))
    created_at: datetime = Field(default_factory=utc_now)
    modified_at: datetime = Field(default_factory=utc_now)
    object_state: ObjectState = ObjectState.UNCHANGED
    concurrency_token: bytes | None = None
    is_deleted: bool | None = None

    @classmethod
    def new(cls, **data: Any) -> Self:
        """Named constructor for a record that has not been stored yet."""
        return cls(object_state=ObjectState.ADDED, **data)

    def mark_modified(self) -> None:
        self.object_state = ObjectState.MODIFIED

    def mark_deleted(self) -> None:
        self.object_state = ObjectState.DELETED
