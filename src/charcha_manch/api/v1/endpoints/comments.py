# src/charcha_manch/api/v1/endpoints/comments.py
"""Comment, reply and comment-reaction endpoints."""

from fastapi import APIRouter, Query, status

from charcha_manch.api.v1.dependencies import SessionDep
from charcha_manch.schemas.comment import (
    CommentCreate,
    CommentDeleteResult,
    CommentDetail,
    CommentResponse,
    ReactionRemoveRequest,
    ReactionRequest,
    ReactionResponse,
    RepliesPage,
)
from charcha_manch.services import comments as comment_service
from charcha_manch.services.reactions import comment_reactions

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("/{post_id}", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_comment(post_id: int, payload: CommentCreate, db: SessionDep) -> CommentResponse:
    """Add a top-level comment to a post."""
    comment = comment_service.create_comment(db, post_id, payload)
    return comment_service.to_comment_response(comment)


@router.post("/reply/{comment_id}", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_reply(comment_id: int, payload: CommentCreate, db: SessionDep) -> CommentResponse:
    """Reply to an existing comment."""
    reply = comment_service.create_reply(db, comment_id, payload)
    return comment_service.to_comment_response(reply)


@router.post("/like/{comment_id}", response_model=ReactionResponse)
def like_comment(comment_id: int, payload: ReactionRequest, db: SessionDep) -> ReactionResponse:
    return comment_reactions.react(db, comment_id, payload.user_id, "like")


@router.post("/dislike/{comment_id}", response_model=ReactionResponse)
def dislike_comment(comment_id: int, payload: ReactionRequest, db: SessionDep) -> ReactionResponse:
    return comment_reactions.react(db, comment_id, payload.user_id, "dislike")


@router.get("/{comment_id}", response_model=CommentDetail)
def get_comment(comment_id: int, db: SessionDep) -> CommentDetail:
    """Get a comment with its direct replies, oldest first."""
    comment = comment_service.get_comment(db, comment_id)
    return comment_service.to_comment_detail(comment)


@router.get("/{comment_id}/replies", response_model=RepliesPage)
def list_replies(
    comment_id: int,
    db: SessionDep,
    page: int = Query(1, description="1-based page number"),
    limit: int | None = Query(None, description="Replies per page"),
) -> RepliesPage:
    """List direct replies to a comment."""
    return comment_service.list_replies(db, comment_id, page, limit)


@router.delete("/{comment_id}/reaction", response_model=ReactionResponse)
def remove_reaction(comment_id: int, payload: ReactionRemoveRequest, db: SessionDep) -> ReactionResponse:
    """Remove the caller's like or dislike; a no-op when there is none."""
    return comment_reactions.unreact(db, comment_id, payload.user_id, payload.reaction_type)


@router.delete("/{comment_id}", response_model=CommentDeleteResult)
def delete_comment(comment_id: int, db: SessionDep) -> CommentDeleteResult:
    """Delete a comment and every reply beneath it."""
    deleted = comment_service.delete_comment(db, comment_id)
    return CommentDeleteResult(deleted_count=deleted)
