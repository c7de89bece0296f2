"""Post lifecycle: creation, view counting and cascading deletion."""

from __future__ import annotations

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from charcha_manch.core.errors import NotFoundError
from charcha_manch.db.retry import run_in_transaction
from charcha_manch.models import Category, Comment, CommentReaction, Constituency, Post, PostReaction, User
from charcha_manch.schemas.post import PostCreate, PostResponse
from charcha_manch.services.reactions import split_reactions

logger = logging.getLogger(__name__)


def create_post(db: Session, payload: PostCreate) -> Post:
    """Create a post; filing it under a category bumps that category's usage."""

    def _work(session: Session) -> Post:
        if session.get(User, payload.author_id) is None:
            raise NotFoundError("User not found")
        if session.get(Constituency, payload.constituency_id) is None:
            raise NotFoundError(f"No constituency found with ID: {payload.constituency_id}")
        if payload.category_id is not None:
            if session.get(Category, payload.category_id) is None:
                raise NotFoundError("Category not found")
            session.execute(
                update(Category)
                .where(Category.id == payload.category_id)
                .values(used_count=Category.used_count + 1)
            )

        post = Post(
            author_id=payload.author_id,
            constituency_id=payload.constituency_id,
            category_id=payload.category_id,
            title=payload.title,
            description=payload.description,
            content=payload.content,
            link=payload.link,
            tags=list(payload.tags),
        )
        session.add(post)
        session.flush()
        return post

    post = run_in_transaction(db, _work, action="create post")
    logger.info("Created post %s in constituency %s", post.id, post.constituency_id)
    return post


def get_post(db: Session, post_id: int, *, count_view: bool = True) -> Post:
    """Return a post, counting the read as a view."""

    def _work(session: Session) -> Post:
        post = session.get(Post, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        if count_view:
            session.execute(update(Post).where(Post.id == post_id).values(views=Post.views + 1))
        return post

    return run_in_transaction(db, _work, action="read post")


def delete_post(db: Session, post_id: int) -> int:
    """Delete a post with every comment on it and all their reactions.

    Returns:
        Number of comments removed with the post.
    """

    def _work(session: Session) -> int:
        post = session.get(Post, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        comment_ids = select(Comment.id).where(Comment.post_id == post_id)
        session.execute(delete(CommentReaction).where(CommentReaction.comment_id.in_(comment_ids)))
        # Null out parent links first so the self-referencing rows can go in one statement.
        session.execute(
            update(Comment).where(Comment.post_id == post_id).values(parent_comment_id=None),
            execution_options={"synchronize_session": False},
        )
        removed = session.execute(
            delete(Comment).where(Comment.post_id == post_id),
            execution_options={"synchronize_session": False},
        ).rowcount
        session.execute(delete(PostReaction).where(PostReaction.post_id == post_id))
        session.delete(post)
        session.flush()
        return removed

    removed = run_in_transaction(db, _work, action="delete post")
    logger.info("Deleted post %s with %d comments", post_id, removed)
    return removed


def to_post_response(post: Post) -> PostResponse:
    """Convert a Post ORM instance to an API schema."""
    likes, dislikes = split_reactions(post.reactions)
    return PostResponse(
        id=post.id,
        author_id=post.author_id,
        constituency_id=post.constituency_id,
        category_id=post.category_id,
        title=post.title,
        description=post.description,
        content=post.content,
        link=post.link,
        tags=list(post.tags or []),
        views=post.views,
        comments=[comment.id for comment in post.comments],
        comment_count=post.comment_count,
        like=likes,
        dislike=dislikes,
        like_count=post.like_count,
        dislike_count=post.dislike_count,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )
