"""Router factory shared by the page and article endpoints.

Both content types expose the same admin surface; only the schemas, the
URL segment and the service dependency differ.
"""

from collections.abc import Callable

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from pawtal.application.schemas import PaginatedResponse, RevisionResponse
from pawtal.application.services import ContentLifecycleService, ContentListing
from pawtal.domain.entities import ContentStatus, ContentType
from pawtal.infrastructure.dependencies import get_actor_id


def _paginated(listing: ContentListing, response_schema: type[BaseModel]) -> dict:
    return {
        "data": [response_schema.model_validate(item, from_attributes=True) for item in listing.items],
        "total": listing.total,
        "page": listing.page,
        "per_page": listing.per_page,
    }


def build_admin_router(
    content_type: ContentType,
    get_service: Callable[..., object],
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    response_schema: type[BaseModel],
) -> APIRouter:
    """Admin CRUD, lifecycle transitions and revision history for one type."""
    segment = f"{content_type.name}s"
    router = APIRouter(prefix=f"/admin/{segment}", tags=[f"Admin {content_type.label}s"])

    @router.get("", response_model=PaginatedResponse[response_schema])
    async def list_items(
        status_filter: ContentStatus | None = Query(None, alias="status"),
        page: int | None = Query(None),
        per_page: int | None = Query(None),
        actor_id: str = Depends(get_actor_id),
        service: ContentLifecycleService = Depends(get_service),
    ) -> dict:
        """List items, newest edits first. Trashed items appear only when asked for."""
        listing = await service.list_items(status=status_filter, page=page, per_page=per_page)
        return _paginated(listing, response_schema)

    @router.post("", response_model=response_schema, status_code=status.HTTP_201_CREATED)
    async def create_item(
        data: create_schema,
        actor_id: str = Depends(get_actor_id),
        service: ContentLifecycleService = Depends(get_service),
    ):
        item = await service.create(data, actor_id)
        return response_schema.model_validate(item, from_attributes=True)

    @router.get("/{item_id}", response_model=response_schema)
    async def get_item(
        item_id: str,
        actor_id: str = Depends(get_actor_id),
        service: ContentLifecycleService = Depends(get_service),
    ):
        item = await service.get(item_id)
        return response_schema.model_validate(item, from_attributes=True)

    @router.patch("/{item_id}", response_model=response_schema)
    async def update_item(
        item_id: str,
        data: update_schema,
        actor_id: str = Depends(get_actor_id),
        service: ContentLifecycleService = Depends(get_service),
    ):
        """Partial update. Omitted fields keep their current value."""
        item = await service.update(item_id, data, actor_id)
        return response_schema.model_validate(item, from_attributes=True)

    @router.post("/{item_id}/publish", response_model=response_schema)
    async def publish_item(
        item_id: str,
        actor_id: str = Depends(get_actor_id),
        service: ContentLifecycleService = Depends(get_service),
    ):
        item = await service.publish(item_id, actor_id)
        return response_schema.model_validate(item, from_attributes=True)

    @router.post("/{item_id}/trash", response_model=response_schema)
    async def trash_item(
        item_id: str,
        actor_id: str = Depends(get_actor_id),
        service: ContentLifecycleService = Depends(get_service),
    ):
        item = await service.trash(item_id, actor_id)
        return response_schema.model_validate(item, from_attributes=True)

    @router.post("/{item_id}/restore", response_model=response_schema)
    async def restore_item(
        item_id: str,
        actor_id: str = Depends(get_actor_id),
        service: ContentLifecycleService = Depends(get_service),
    ):
        """Bring a trashed item back as a draft."""
        item = await service.restore(item_id, actor_id)
        return response_schema.model_validate(item, from_attributes=True)

    @router.get("/{item_id}/revisions", response_model=list[RevisionResponse])
    async def list_revisions(
        item_id: str,
        actor_id: str = Depends(get_actor_id),
        service: ContentLifecycleService = Depends(get_service),
    ) -> list[RevisionResponse]:
        revisions = await service.list_revisions(item_id)
        return [RevisionResponse.model_validate(r, from_attributes=True) for r in revisions]

    @router.post("/{item_id}/revisions/{revision_id}/restore", response_model=response_schema)
    async def restore_revision(
        item_id: str,
        revision_id: str,
        actor_id: str = Depends(get_actor_id),
        service: ContentLifecycleService = Depends(get_service),
    ):
        """Copy an old revision's text back onto the item as a new revision."""
        item = await service.restore_revision(item_id, revision_id, actor_id)
        return response_schema.model_validate(item, from_attributes=True)

    return router


def build_public_router(
    content_type: ContentType,
    get_service: Callable[..., object],
    response_schema: type[BaseModel],
    with_listing: bool = False,
    with_related: bool = False,
) -> APIRouter:
    """Read-only access to published items. Anything else is a 404."""
    segment = f"{content_type.name}s"
    router = APIRouter(prefix=f"/{segment}", tags=[f"Public {content_type.label}s"])

    if with_listing:

        @router.get("", response_model=PaginatedResponse[response_schema])
        async def list_published(
            page: int | None = Query(None),
            per_page: int | None = Query(None),
            service: ContentLifecycleService = Depends(get_service),
        ) -> dict:
            listing = await service.list_published(page=page, per_page=per_page)
            return _paginated(listing, response_schema)

    @router.get("/{slug}", response_model=response_schema)
    async def get_published(
        slug: str,
        service: ContentLifecycleService = Depends(get_service),
    ):
        item = await service.get_published_by_slug(slug)
        return response_schema.model_validate(item, from_attributes=True)

    if with_related:

        @router.get("/{slug}/related", response_model=list[response_schema])
        async def list_related(
            slug: str,
            limit: int | None = Query(None),
            service: ContentLifecycleService = Depends(get_service),
        ) -> list:
            """Published items sharing a category with this one, newest first."""
            items = await service.list_related(slug, limit)
            return [response_schema.model_validate(item, from_attributes=True) for item in items]

    return router
