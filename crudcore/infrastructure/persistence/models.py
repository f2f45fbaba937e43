"""ORM column mixins shared by every entity table.

Concrete tables combine Base with EntityColumns and either IdentityColumn
(conventional autoincrement ``id`` key) or their own integer primary key:

    class ProductRow(IdentityColumn, EntityColumns, Base):
        __tablename__ = "products"
        name: Mapped[str] = mapped_column(Text, nullable=False)
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

CONCURRENCY_TOKEN_BYTES = 16


class IdentityColumn:
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class EntityColumns:
    """Audit, soft-delete and optimistic-concurrency columns.

    concurrency_token is regenerated by the repository on every write and
    compared in the WHERE clause of updates and deletes.
    """

    external_id: Mapped[str] = mapped_column(String(36), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    modified_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    concurrency_token: Mapped[bytes] = mapped_column(
        LargeBinary(CONCURRENCY_TOKEN_BYTES), nullable=False
    )
    is_deleted: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
