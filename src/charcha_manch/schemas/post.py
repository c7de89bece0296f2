"""Post-related Pydantic schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .common import validate_optional_url


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    author_id: int = Field(..., validation_alias=AliasChoices("author_id", "author"))
    constituency_id: int = Field(..., validation_alias=AliasChoices("constituency_id", "constituency"))
    category_id: int | None = Field(None, validation_alias=AliasChoices("category_id", "category"))
    title: str | None = None
    description: str | None = None
    content: str = Field(..., min_length=1, description="Post body")
    link: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("link")
    @classmethod
    def _check_link(cls, value: str | None) -> str | None:
        return validate_optional_url(value)


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    author_id: int
    constituency_id: int
    category_id: int | None
    title: str | None
    description: str | None
    content: str
    link: str | None
    tags: list[str]
    views: int
    comments: list[int]
    comment_count: int
    like: list[int]
    dislike: list[int]
    like_count: int
    dislike_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
