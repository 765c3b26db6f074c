"""Trash endpoints — combined listing and on-demand emptying."""

from fastapi import APIRouter, Depends

from pawtal.application.schemas import (
    ArticleResponse,
    EmptyTrashResponse,
    PageResponse,
    TrashResponse,
)
from pawtal.application.services import TrashService
from pawtal.domain.entities import ARTICLE, PAGE
from pawtal.infrastructure.dependencies import get_actor_id, get_trash_service

router = APIRouter(prefix="/admin/trash", tags=["Admin Trash"])


@router.get("", response_model=TrashResponse)
async def list_trash(
    actor_id: str = Depends(get_actor_id),
    service: TrashService = Depends(get_trash_service),
) -> TrashResponse:
    """Everything currently in the trash, most recently trashed first."""
    trash = await service.list_trash()
    return TrashResponse(
        pages=[PageResponse.model_validate(p, from_attributes=True) for p in trash[PAGE.name]],
        articles=[ArticleResponse.model_validate(a, from_attributes=True) for a in trash[ARTICLE.name]],
    )


@router.post("/empty", response_model=EmptyTrashResponse)
async def empty_trash(
    actor_id: str = Depends(get_actor_id),
    service: TrashService = Depends(get_trash_service),
) -> EmptyTrashResponse:
    """Erase items whose retention window has run out. Newer items stay."""
    deleted = await service.empty_trash()
    return EmptyTrashResponse(
        pages_deleted=deleted[PAGE.name],
        articles_deleted=deleted[ARTICLE.name],
    )
