"""Concrete SQLAlchemy repository implementations.

Exports the generic SqlRepository base and the get_repository() factory for
wiring at the application boundary.
"""

from __future__ import annotations

from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from crudcore.infrastructure.database import settings

from .base import SqlRepository, new_concurrency_token, to_pascal

R = TypeVar("R", bound=SqlRepository)


def get_repository(repository_type: type[R], session: AsyncSession) -> R:
    """Construct a repository bound to the given session.

    Intended for use as a dependency:

        async def handler(session: AsyncSession = Depends(get_session)) -> ...:
            products = get_repository(SqlProductRepository, session)
            product = await products.find_by_id(product_id)
    """
    return repository_type(session, query_timeout=settings.query_timeout_seconds)


__all__ = [
    "SqlRepository",
    "get_repository",
    "new_concurrency_token",
    "to_pascal",
]
