"""Pydantic DTOs for categories."""

from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["Guides"])
    slug: str | None = Field(None, max_length=255)


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str

    model_config = {"from_attributes": True}


class CategoryUpdate(BaseModel):
    """Full rename. An omitted slug keeps the current one."""

    name: str = Field(..., min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=255)
