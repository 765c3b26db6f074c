"""DTOs for the trash management endpoints."""

from pydantic import BaseModel

from .content import ArticleResponse, PageResponse


class TrashResponse(BaseModel):
    """Combined trash listing — trashed pages and trashed articles."""

    pages: list[PageResponse]
    articles: list[ArticleResponse]


class EmptyTrashResponse(BaseModel):
    ok: bool = True
    pages_deleted: int
    articles_deleted: int
