"""
Category service: validation + repository calls, one transaction per operation.

Every public method opens exactly one transaction through `transaction()`. Input
is validated inside that transaction but before any statement is issued, so a
rejected request does no store work and still goes through a clean rollback.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..database.transaction import transaction
from ..exceptions.base import NotFoundError
from ..models.category import Category
from ..repositories.category_repository import CategoryRepository
from ..schemas.category import CategoryResponse
from ..validators.category_validators import validate_category_request

logger = logging.getLogger(__name__)


def to_category_response(category: Category) -> CategoryResponse:
    return CategoryResponse.model_validate(category)


class CategoryService:
    def __init__(self, repository: CategoryRepository, session_factory: async_sessionmaker[AsyncSession]):
        self.repository = repository
        self.session_factory = session_factory

    async def create(self, payload: Any) -> CategoryResponse:
        async with transaction(self.session_factory) as session:
            request = validate_category_request(payload)
            category = await self.repository.save(session, Category(name=request.name))

        logger.info("service.create.success", extra={"id": category.id})
        return to_category_response(category)

    async def update(self, category_id: int, payload: Any) -> CategoryResponse:
        """
        Rename the category `category_id`.

        The row is not loaded first: an id with no row still answers with the
        echoed id and name, as the repository update is a silent no-op.
        """
        async with transaction(self.session_factory) as session:
            request = validate_category_request(payload)
            category = await self.repository.update(session, Category(id=category_id, name=request.name))

        logger.info("service.update.success", extra={"id": category_id})
        return to_category_response(category)

    async def delete(self, category_id: int) -> None:
        async with transaction(self.session_factory) as session:
            category = await self._get_or_raise(session, category_id)
            await self.repository.delete(session, category)

        logger.info("service.delete.success", extra={"id": category_id})

    async def find_by_id(self, category_id: int) -> CategoryResponse:
        async with transaction(self.session_factory) as session:
            category = await self._get_or_raise(session, category_id)

        return to_category_response(category)

    async def find_all(self) -> list[CategoryResponse]:
        async with transaction(self.session_factory) as session:
            categories = await self.repository.find_all(session)

        return [to_category_response(c) for c in categories]

    async def _get_or_raise(self, session: AsyncSession, category_id: int) -> Category:
        category = await self.repository.find_by_id(session, category_id)
        if category is None:
            logger.info("service.category_not_found", extra={"id": category_id})
            raise NotFoundError("category is not found")
        return category
