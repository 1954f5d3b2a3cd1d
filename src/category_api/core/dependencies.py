from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..repositories.category_repository import CategoryRepository
from ..services.category_service import CategoryService

_category_repository = CategoryRepository()


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    # Set on app.state by the lifespan in main.py (or injected through create_app)
    return request.app.state.session_factory


def get_category_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> CategoryService:
    return CategoryService(_category_repository, session_factory)
