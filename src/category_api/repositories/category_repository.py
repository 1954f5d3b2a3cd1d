"""
Category repository: CRUD statements against the `categories` table.

The repository holds no session of its own. Every method receives the open
AsyncSession of the caller's transaction, so all statements issued for one
request run inside the same transaction. Nothing here commits, rolls back, or
translates store errors; SQLAlchemy exceptions propagate to the transaction
wrapper unchanged.
"""

import logging
import time
from typing import Sequence

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.category import Category

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class CategoryRepository:
    """
    Repository for Category entity operations.

    Stateless: one instance can be shared by every request.
    """

    async def save(self, session: AsyncSession, category: Category) -> Category:
        """
        Insert one row and return the same object with `id` populated.

        flush() sends the INSERT inside the current transaction so the generated
        key is available before commit.
        """
        logger.debug("repo.save.start", extra={"model": "Category", "operation": "save"})
        start = time.perf_counter()

        session.add(category)
        await session.flush()

        logger.debug(
            "repo.save.success",
            extra={"model": "Category", "operation": "save", "id": category.id, "duration_ms": _elapsed_ms(start)},
        )
        return category

    async def update(self, session: AsyncSession, category: Category) -> Category:
        """
        Set `name` on the row matching `category.id`.

        A missing row is not an error at this layer: zero rows are updated and the
        input is returned as-is.
        """
        start = time.perf_counter()
        stmt = (
            update(Category)
            .where(Category.id == category.id)
            .values(name=category.name)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)

        logger.debug(
            "repo.update.success",
            extra={
                "model": "Category",
                "operation": "update",
                "id": category.id,
                "rows": result.rowcount,
                "duration_ms": _elapsed_ms(start),
            },
        )
        return category

    async def delete(self, session: AsyncSession, category: Category) -> None:
        """Delete the row matching `category.id`; silent when nothing matches."""
        start = time.perf_counter()
        stmt = (
            delete(Category)
            .where(Category.id == category.id)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)

        logger.debug(
            "repo.delete.success",
            extra={
                "model": "Category",
                "operation": "delete",
                "id": category.id,
                "rows": result.rowcount,
                "duration_ms": _elapsed_ms(start),
            },
        )

    async def find_by_id(self, session: AsyncSession, category_id: int) -> Category | None:
        """
        Return the category with `category_id`, or None when no row matches.

        `id` is the primary key, so at most one row can match.
        """
        result = await session.execute(
            select(Category).where(Category.id == category_id)
        )
        category = result.scalar_one_or_none()

        logger.debug(
            "repo.find_by_id",
            extra={"model": "Category", "operation": "find_by_id", "id": category_id, "found": category is not None},
        )
        return category

    async def find_all(self, session: AsyncSession) -> Sequence[Category]:
        """Return every category in the order the store yields them (no ORDER BY)."""
        result = await session.execute(select(Category))
        categories = result.scalars().all()

        logger.debug(
            "repo.find_all",
            extra={"model": "Category", "operation": "find_all", "count": len(categories)},
        )
        return categories
