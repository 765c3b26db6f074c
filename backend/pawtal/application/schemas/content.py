"""Pydantic DTOs (Data Transfer Objects) for pages, articles and revisions."""

from datetime import datetime

from pydantic import BaseModel, Field

from pawtal.domain.entities import ContentStatus


class PageCreate(BaseModel):
    """Schema for creating a new page. The slug is derived from the title when omitted."""

    title: str = Field(..., min_length=1, max_length=255, examples=["About us"])
    slug: str | None = Field(None, max_length=255, examples=["about-us"])
    content: str = Field("", examples=["<p>Hello.</p>"])
    status: ContentStatus | None = None
    publish_at: datetime | None = None
    category_ids: list[str] | None = None


class ArticleCreate(PageCreate):
    """Schema for creating a new article."""

    short_text: str | None = Field(None, examples=["A one-paragraph teaser."])


class PageUpdate(BaseModel):
    """Partial update — every field optional, omitted or null fields keep their value."""

    title: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=255)
    content: str | None = None
    status: ContentStatus | None = None
    publish_at: datetime | None = None
    category_ids: list[str] | None = None


class ArticleUpdate(PageUpdate):
    short_text: str | None = None


class PageResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    title: str
    slug: str
    content: str
    status: ContentStatus
    publish_at: datetime | None
    trashed_at: datetime | None
    author_id: str
    category_ids: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ArticleResponse(PageResponse):
    short_text: str
    reading_time_minutes: int


class RevisionResponse(BaseModel):
    id: str
    item_id: str
    number: int
    title: str
    content: str
    short_text: str | None
    author_id: str
    created_at: datetime

    model_config = {"from_attributes": True}
