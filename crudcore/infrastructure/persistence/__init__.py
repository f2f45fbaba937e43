"""Persistence package: ORM column mixins and SQLAlchemy repositories."""

from crudcore.infrastructure.persistence.models import (
    CONCURRENCY_TOKEN_BYTES,
    EntityColumns,
    IdentityColumn,
)
from crudcore.infrastructure.persistence.repositories import (
    SqlRepository,
    get_repository,
)

__all__ = [
    "CONCURRENCY_TOKEN_BYTES",
    "EntityColumns",
    "IdentityColumn",
    "SqlRepository",
    "get_repository",
]
