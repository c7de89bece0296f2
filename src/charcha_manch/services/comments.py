"""Threaded comments: creation, reply listing and cascading deletion."""

from __future__ import annotations

import logging
import math

from sqlalchemy import case, delete, func, select, update
from sqlalchemy.orm import Session

from charcha_manch.core.errors import InvalidInputError, NotFoundError
from charcha_manch.core.settings import settings
from charcha_manch.db.retry import read_with_retry, run_in_transaction
from charcha_manch.models import Comment, CommentReaction, Post, User
from charcha_manch.schemas.comment import (
    CommentCreate,
    CommentDetail,
    CommentResponse,
    RepliesPage,
)
from charcha_manch.schemas.common import Pagination
from charcha_manch.services.reactions import split_reactions

logger = logging.getLogger(__name__)


def _floored_decrement(column, amount: int = 1):
    return case((column > amount, column - amount), else_=0)


def _require_user(session: Session, user_id: int) -> None:
    if session.get(User, user_id) is None:
        raise NotFoundError("User not found")


def get_comment(db: Session, comment_id: int) -> Comment:
    """Return the comment or raise ``NotFoundError``."""
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment


def create_comment(db: Session, post_id: int, payload: CommentCreate) -> Comment:
    """Add a top-level comment to a post and bump the post's comment count."""

    def _work(session: Session) -> Comment:
        post = session.get(Post, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        _require_user(session, payload.user_id)

        comment = Comment(
            post_id=post.id,
            user_id=payload.user_id,
            constituency_id=post.constituency_id,
            content=payload.content,
            link=payload.link,
        )
        session.add(comment)
        session.execute(
            update(Post).where(Post.id == post.id).values(comment_count=Post.comment_count + 1)
        )
        session.flush()
        return comment

    comment = run_in_transaction(db, _work, action="create comment")
    logger.info("Created comment %s on post %s", comment.id, post_id)
    return comment


def create_reply(db: Session, parent_comment_id: int, payload: CommentCreate) -> Comment:
    """Reply to a comment and bump the parent's reply count.

    The post's ``comment_count`` is left alone on create; deleting a reply still
    decrements it.
    """

    def _work(session: Session) -> Comment:
        parent = session.get(Comment, parent_comment_id)
        if parent is None:
            raise NotFoundError("Parent comment not found")
        _require_user(session, payload.user_id)

        reply = Comment(
            post_id=parent.post_id,
            user_id=payload.user_id,
            constituency_id=parent.constituency_id,
            parent_comment_id=parent.id,
            content=payload.content,
            link=payload.link,
        )
        session.add(reply)
        session.execute(
            update(Comment).where(Comment.id == parent.id).values(reply_count=Comment.reply_count + 1)
        )
        session.flush()
        return reply

    reply = run_in_transaction(db, _work, action="create reply")
    logger.info("Created reply %s to comment %s", reply.id, parent_comment_id)
    return reply


def collect_subtree(session: Session, comment_id: int) -> list[list[int]]:
    """Return the ids of a comment and all its descendants, one list per depth.

    Walks the tree level by level with a worklist, so depth is bounded only by
    the data, not by the call stack.
    """
    levels = [[comment_id]]
    frontier = [comment_id]
    while frontier:
        children = list(
            session.execute(select(Comment.id).where(Comment.parent_comment_id.in_(frontier))).scalars()
        )
        if children:
            levels.append(children)
        frontier = children
    return levels


def delete_comment(db: Session, comment_id: int) -> int:
    """Delete a comment together with its whole reply subtree.

    Everything happens in one transaction. The post's ``comment_count`` drops by
    the number of removed comments whatever the depth of the deleted one, and a
    reply also decrements its parent's ``reply_count``. Reaction rows are
    removed and the subtree is deleted deepest level first.

    Returns:
        Number of comments deleted.
    """

    def _work(session: Session) -> int:
        comment = get_comment(session, comment_id)
        levels = collect_subtree(session, comment.id)
        all_ids = [cid for level in levels for cid in level]

        session.execute(
            update(Post)
            .where(Post.id == comment.post_id)
            .values(comment_count=_floored_decrement(Post.comment_count, len(all_ids)))
        )
        if comment.is_reply:
            session.execute(
                update(Comment)
                .where(Comment.id == comment.parent_comment_id)
                .values(reply_count=_floored_decrement(Comment.reply_count))
            )

        session.execute(delete(CommentReaction).where(CommentReaction.comment_id.in_(all_ids)))
        for level in reversed(levels):
            session.execute(delete(Comment).where(Comment.id.in_(level)))
        return len(all_ids)

    deleted = run_in_transaction(db, _work, action="delete comment")
    logger.info("Deleted comment %s and %d descendants", comment_id, deleted - 1)
    return deleted


def list_replies(db: Session, comment_id: int, page: int = 1, limit: int | None = None) -> RepliesPage:
    """Return one page of direct replies, oldest first."""
    limit = settings.default_page_size if limit is None else limit
    if page < 1:
        raise InvalidInputError("Page number must be greater than 0")
    if limit < 1 or limit > settings.max_page_size:
        raise InvalidInputError(f"Limit must be between 1 and {settings.max_page_size}")

    def _read(session: Session) -> RepliesPage:
        get_comment(session, comment_id)
        total = session.execute(
            select(func.count()).select_from(Comment).where(Comment.parent_comment_id == comment_id)
        ).scalar_one()
        rows = session.execute(
            select(Comment)
            .where(Comment.parent_comment_id == comment_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .offset((page - 1) * limit)
            .limit(limit)
        ).scalars()
        total_pages = math.ceil(total / limit)
        return RepliesPage(
            replies=[to_comment_response(row) for row in rows],
            pagination=Pagination(
                current_page=page,
                total_pages=total_pages,
                total_items=total,
                has_next_page=page < total_pages,
                has_prev_page=page > 1,
                limit=limit,
            ),
        )

    return read_with_retry(db, _read, action="list replies")


def to_comment_response(comment: Comment) -> CommentResponse:
    """Convert a Comment ORM instance to an API schema."""
    likes, dislikes = split_reactions(comment.reactions)
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        user_id=comment.user_id,
        constituency_id=comment.constituency_id,
        parent_comment_id=comment.parent_comment_id,
        content=comment.content,
        link=comment.link,
        replies=[reply.id for reply in comment.replies],
        reply_count=comment.reply_count,
        like=likes,
        dislike=dislikes,
        like_count=comment.like_count,
        dislike_count=comment.dislike_count,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


def to_comment_detail(comment: Comment) -> CommentDetail:
    """Convert a comment and its direct replies to an API schema."""
    base = to_comment_response(comment)
    return CommentDetail(
        **base.model_dump(),
        reply_comments=[to_comment_response(reply) for reply in comment.replies],
    )
