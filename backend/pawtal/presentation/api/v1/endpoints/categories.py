"""Category endpoints."""

from fastapi import APIRouter, Depends, status

from pawtal.application.schemas import CategoryCreate, CategoryResponse, CategoryUpdate
from pawtal.application.services import CategoryService
from pawtal.infrastructure.dependencies import get_actor_id, get_category_service

router = APIRouter(prefix="/admin/categories", tags=["Admin Categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    actor_id: str = Depends(get_actor_id),
    service: CategoryService = Depends(get_category_service),
) -> list[CategoryResponse]:
    categories = await service.list_categories()
    return [CategoryResponse.model_validate(c, from_attributes=True) for c in categories]


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    actor_id: str = Depends(get_actor_id),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    category = await service.create_category(data)
    return CategoryResponse.model_validate(category, from_attributes=True)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    data: CategoryUpdate,
    actor_id: str = Depends(get_actor_id),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    category = await service.update_category(category_id, data)
    return CategoryResponse.model_validate(category, from_attributes=True)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: str,
    actor_id: str = Depends(get_actor_id),
    service: CategoryService = Depends(get_category_service),
) -> None:
    """Delete a category. Pages and articles simply lose the assignment."""
    await service.delete_category(category_id)
