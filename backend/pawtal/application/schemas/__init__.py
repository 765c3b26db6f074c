from .content import (
    ArticleCreate,
    ArticleResponse,
    ArticleUpdate,
    PageCreate,
    PageResponse,
    PageUpdate,
    RevisionResponse,
)
from .pagination import PaginatedResponse, clamp_page, clamp_per_page, clamp_related_limit
from .trash import EmptyTrashResponse, TrashResponse
from .category import CategoryCreate, CategoryResponse, CategoryUpdate

__all__ = [
    "ArticleCreate",
    "ArticleResponse",
    "ArticleUpdate",
    "PageCreate",
    "PageResponse",
    "PageUpdate",
    "RevisionResponse",
    "PaginatedResponse",
    "clamp_page",
    "clamp_per_page",
    "clamp_related_limit",
    "EmptyTrashResponse",
    "TrashResponse",
    "CategoryCreate",
    "CategoryResponse",
    "CategoryUpdate",
]
