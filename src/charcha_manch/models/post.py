# src/charcha_manch/models/post.py
"""SQLAlchemy models for posts and their reactions."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from charcha_manch.db.session import Base
from charcha_manch.db.time import utcnow

if TYPE_CHECKING:
    from .comment import Comment


class Post(Base):
    """User-generated discussion thread scoped to a constituency."""

    __tablename__ = "post"
    __table_args__ = (
        Index("ix_post_constituency_created", "constituency_id", "created_at"),
        Index("ix_post_author_created", "author_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[int] = mapped_column(Integer, ForeignKey("app_user.id"), nullable=False)
    constituency_id: Mapped[int] = mapped_column(Integer, ForeignKey("constituency.id"), nullable=False)
    category_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("category.id", ondelete="SET NULL"),
        nullable=True,
    )

    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    link: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Incremented per top-level comment; decremented per deleted comment at any depth.
    comment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    dislike_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        primaryjoin="and_(Post.id == Comment.post_id, Comment.parent_comment_id.is_(None))",
        order_by="Comment.created_at.desc()",
        viewonly=True,
    )
    reactions: Mapped[list[PostReaction]] = relationship(viewonly=True)

    __mapper_args__ = {"version_id_col": version}


class PostReaction(Base):
    """Per-user like or dislike on a post.

    The composite primary key allows one reaction per user, which makes
    like/dislike mutually exclusive.
    """

    __tablename__ = "post_reaction"
    __table_args__ = (
        CheckConstraint("kind IN ('like', 'dislike')", name="ck_post_reaction_kind"),
        Index("ix_post_reaction_post_id", "post_id"),
    )

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    kind: Mapped[str] = mapped_column(String(8), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
