"""Comment, reply and reaction Pydantic schemas."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from charcha_manch.models.comment import COMMENT_MAX_LENGTH

from .common import Pagination, validate_optional_url

ReactionKind = Literal["like", "dislike"]


class CommentCreate(BaseModel):
    """Body for a new comment or reply."""

    user_id: int = Field(..., validation_alias=AliasChoices("user_id", "user", "userId"))
    content: str = Field(..., max_length=COMMENT_MAX_LENGTH)
    link: str | None = Field(None, description="Optional http(s) link")

    @field_validator("content")
    @classmethod
    def _strip_content(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Comment content is required")
        return value

    @field_validator("link")
    @classmethod
    def _check_link(cls, value: str | None) -> str | None:
        return validate_optional_url(value)


class ReactionRequest(BaseModel):
    """Body identifying the reacting user.

    ``user_id`` is optional here so that a missing user is reported as an
    invalid-input error rather than a schema error.
    """

    user_id: int | None = Field(None, validation_alias=AliasChoices("user_id", "userId"))


class ReactionRemoveRequest(ReactionRequest):
    """Body for removing a reaction of a given kind."""

    reaction_type: ReactionKind = Field(..., validation_alias=AliasChoices("reaction_type", "reactionType"))


class ReactionResponse(BaseModel):
    """Reaction counts after a like/dislike change."""

    message: str
    like_count: int = Field(..., serialization_alias="likeCount")
    dislike_count: int = Field(..., serialization_alias="dislikeCount")


class CommentResponse(BaseModel):
    """Comment as returned to clients."""

    id: int
    post_id: int
    user_id: int
    constituency_id: int
    parent_comment_id: int | None
    content: str
    link: str | None
    replies: list[int]
    reply_count: int
    like: list[int]
    dislike: list[int]
    like_count: int
    dislike_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommentDetail(CommentResponse):
    """Comment with its direct replies expanded, oldest first."""

    reply_comments: list[CommentResponse]


class RepliesPage(BaseModel):
    """One page of direct replies."""

    replies: list[CommentResponse]
    pagination: Pagination


class CommentDeleteResult(BaseModel):
    """Outcome of a cascading comment deletion."""

    message: str = "Comment deleted successfully"
    deleted_count: int
