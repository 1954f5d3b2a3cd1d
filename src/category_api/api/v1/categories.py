"""
Category routes.

Thin controller: parse the path id and the JSON body, call the service, wrap the
result in the envelope. No validation and no status decisions on failure paths
happen here; failures propagate to the handlers in error_handlers.py.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Path, status

from ...core.dependencies import get_category_service
from ...schemas.category import CategoryResponse
from ...schemas.web import WebResponse
from ...services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])

# Ids outside the 64-bit integer range the store can hold are rejected with 400
CategoryId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]


@router.post("", response_model=WebResponse[CategoryResponse])
async def create_category(
    payload: Any = Body(...),
    service: CategoryService = Depends(get_category_service),
):
    category = await service.create(payload)
    return WebResponse[CategoryResponse].of(status.HTTP_200_OK, category)


@router.put("/{category_id}", response_model=WebResponse[CategoryResponse])
async def update_category(
    category_id: CategoryId,
    payload: Any = Body(...),
    service: CategoryService = Depends(get_category_service),
):
    category = await service.update(category_id, payload)
    return WebResponse[CategoryResponse].of(status.HTTP_200_OK, category)


@router.delete("/{category_id}", response_model=WebResponse[None])
async def delete_category(
    category_id: CategoryId,
    service: CategoryService = Depends(get_category_service),
):
    await service.delete(category_id)
    return WebResponse[None].of(status.HTTP_200_OK)


@router.get("/{category_id}", response_model=WebResponse[CategoryResponse])
async def get_category(
    category_id: CategoryId,
    service: CategoryService = Depends(get_category_service),
):
    category = await service.find_by_id(category_id)
    return WebResponse[CategoryResponse].of(status.HTTP_200_OK, category)


@router.get("", response_model=WebResponse[list[CategoryResponse]])
async def list_categories(
    service: CategoryService = Depends(get_category_service),
):
    categories = await service.find_all()
    return WebResponse[list[CategoryResponse]].of(status.HTTP_200_OK, categories)
