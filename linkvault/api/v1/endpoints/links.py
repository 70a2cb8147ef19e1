"""Links API: cache-first reads and owner-scoped mutations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from linkvault.api.v1.dependencies import (
    get_bookmark_query_service,
    get_current_user_id,
    get_link_service,
)
from linkvault.application.dtos.link import LinkCreate, LinkUpdate
from linkvault.application.services import LinkService
from linkvault.application.use_cases import BookmarkQueryService
from linkvault.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from linkvault.core.limiter import limit_writes
from linkvault.schemas.common import MessageResponse
from linkvault.schemas.link import (
    LinkCreateRequest,
    LinkItemResponse,
    LinkListResponse,
    LinkResponse,
    LinkUpdateRequest,
)

router = APIRouter()

OwnerId = Annotated[int, Depends(get_current_user_id)]


@router.get("", response_model=LinkListResponse)
async def list_links(
    owner_id: OwnerId,
    service: Annotated[BookmarkQueryService, Depends(get_bookmark_query_service)],
    page: Annotated[int, Query()] = DEFAULT_PAGE,
    limit: Annotated[int, Query()] = DEFAULT_PAGE_SIZE,
    category_id: Annotated[int | None, Query(alias="categoryId")] = None,
    search: Annotated[str | None, Query()] = None,
):
    """One page of links, newest first. With a non-blank search, every match (no paging)."""
    result = await service.list_links(
        owner_id, page=page, limit=limit, category_id=category_id, search=search
    )
    return LinkListResponse.model_validate(result)


@router.get("/{link_id}", response_model=LinkItemResponse)
async def get_link(
    link_id: int,
    owner_id: OwnerId,
    service: Annotated[BookmarkQueryService, Depends(get_bookmark_query_service)],
):
    return LinkItemResponse.model_validate(await service.get_link(owner_id, link_id))


@router.post("", response_model=LinkResponse, status_code=201)
@limit_writes
async def create_link(
    request: Request,
    body: LinkCreateRequest,
    owner_id: OwnerId,
    service: Annotated[LinkService, Depends(get_link_service)],
):
    link = await service.create_link(
        owner_id,
        LinkCreate(
            title=body.title,
            url=body.url,
            description=body.description,
            category_id=body.category_id,
        ),
    )
    return LinkResponse.model_validate(link)


@router.put("/{link_id}", response_model=LinkResponse)
@limit_writes
async def update_link(
    request: Request,
    link_id: int,
    body: LinkUpdateRequest,
    owner_id: OwnerId,
    service: Annotated[LinkService, Depends(get_link_service)],
):
    """Partial update: only fields present in the body change."""
    changes = LinkUpdate.from_fields(body.model_dump(exclude_unset=True))
    link = await service.update_link(owner_id, link_id, changes)
    return LinkResponse.model_validate(link)


@router.delete("/{link_id}", response_model=MessageResponse)
@limit_writes
async def delete_link(
    request: Request,
    link_id: int,
    owner_id: OwnerId,
    service: Annotated[LinkService, Depends(get_link_service)],
):
    await service.delete_link(owner_id, link_id)
    return MessageResponse(message="Link deleted")
