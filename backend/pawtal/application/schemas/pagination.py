"""Pagination envelope shared by list endpoints."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 100
DEFAULT_RELATED = 5
MAX_RELATED = 20


def clamp_page(page: int | None) -> int:
    return max(page or 1, 1)


def clamp_per_page(per_page: int | None) -> int:
    """Page size clamped to 1..100, defaulting to 20."""
    if per_page is None:
        return DEFAULT_PER_PAGE
    return min(max(per_page, 1), MAX_PER_PAGE)


def clamp_related_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_RELATED
    return min(max(limit, 1), MAX_RELATED)


class PaginatedResponse(BaseModel, Generic[T]):
    data: list[T]
    total: int
    page: int
    per_page: int
