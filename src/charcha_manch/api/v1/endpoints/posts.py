# src/charcha_manch/api/v1/endpoints/posts.py
"""Post-related endpoints for the Charcha Manch API."""

from fastapi import APIRouter, status

from charcha_manch.api.v1.dependencies import SessionDep
from charcha_manch.schemas.comment import ReactionRemoveRequest, ReactionRequest, ReactionResponse
from charcha_manch.schemas.common import MessageResponse
from charcha_manch.schemas.post import PostCreate, PostResponse
from charcha_manch.services import posts as post_service
from charcha_manch.services.reactions import post_reactions

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(payload: PostCreate, db: SessionDep) -> PostResponse:
    """Create a new post in a constituency."""
    post = post_service.create_post(db, payload)
    return post_service.to_post_response(post)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: int, db: SessionDep) -> PostResponse:
    """Get a specific post by ID, counting the view."""
    post = post_service.get_post(db, post_id)
    return post_service.to_post_response(post)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(post_id: int, db: SessionDep) -> MessageResponse:
    """Delete a post with all of its comments and reactions."""
    removed = post_service.delete_post(db, post_id)
    return MessageResponse(message=f"Post deleted successfully with {removed} comments")


@router.post("/{post_id}/like", response_model=ReactionResponse)
def like_post(post_id: int, payload: ReactionRequest, db: SessionDep) -> ReactionResponse:
    return post_reactions.react(db, post_id, payload.user_id, "like")


@router.post("/{post_id}/dislike", response_model=ReactionResponse)
def dislike_post(post_id: int, payload: ReactionRequest, db: SessionDep) -> ReactionResponse:
    return post_reactions.react(db, post_id, payload.user_id, "dislike")


@router.delete("/{post_id}/reaction", response_model=ReactionResponse)
def remove_post_reaction(post_id: int, payload: ReactionRemoveRequest, db: SessionDep) -> ReactionResponse:
    return post_reactions.unreact(db, post_id, payload.user_id, payload.reaction_type)
