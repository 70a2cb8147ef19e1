"""Categories API: cache-first reads and owner-scoped mutations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from linkvault.api.v1.dependencies import (
    get_bookmark_query_service,
    get_category_service,
    get_current_user_id,
)
from linkvault.application.services import CategoryService
from linkvault.application.use_cases import BookmarkQueryService
from linkvault.core.limiter import limit_writes
from linkvault.schemas.category import (
    CategoryDeletedResponse,
    CategoryDetailResponse,
    CategoryRequest,
    CategoryResponse,
)

router = APIRouter()

OwnerId = Annotated[int, Depends(get_current_user_id)]


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    owner_id: OwnerId,
    service: Annotated[BookmarkQueryService, Depends(get_bookmark_query_service)],
):
    """The caller's categories ordered by name."""
    categories = await service.list_categories(owner_id)
    return [CategoryResponse.model_validate(c) for c in categories]


@router.get("/{category_id}", response_model=CategoryDetailResponse)
async def get_category(
    category_id: int,
    owner_id: OwnerId,
    service: Annotated[BookmarkQueryService, Depends(get_bookmark_query_service)],
):
    """One category with its links; 404 when absent or owned by someone else."""
    detail = await service.get_category_with_links(owner_id, category_id)
    return CategoryDetailResponse.model_validate(detail)


@router.post("", response_model=CategoryResponse, status_code=201)
@limit_writes
async def create_category(
    request: Request,
    body: CategoryRequest,
    owner_id: OwnerId,
    service: Annotated[CategoryService, Depends(get_category_service)],
):
    category = await service.create_category(owner_id, body.name)
    return CategoryResponse.model_validate(category)


@router.put("/{category_id}", response_model=CategoryResponse)
@limit_writes
async def update_category(
    request: Request,
    category_id: int,
    body: CategoryRequest,
    owner_id: OwnerId,
    service: Annotated[CategoryService, Depends(get_category_service)],
):
    category = await service.update_category(owner_id, category_id, body.name)
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", response_model=CategoryDeletedResponse)
@limit_writes
async def delete_category(
    request: Request,
    category_id: int,
    owner_id: OwnerId,
    service: Annotated[CategoryService, Depends(get_category_service)],
):
    category = await service.delete_category(owner_id, category_id)
    return CategoryDeletedResponse(
        message="Category deleted",
        note="Links that belonged to this category are now uncategorized",
        category=CategoryResponse.model_validate(category),
    )
