# src/charcha_manch/models/comment.py
"""SQLAlchemy models for threaded comments and their reactions."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from charcha_manch.db.session import Base
from charcha_manch.db.time import utcnow

COMMENT_MAX_LENGTH = 1000


class Comment(Base):
    """Comment on a post, or a reply to another comment.

    Replies keep ``parent_comment_id`` pointing at their parent; the parent
    keeps ``reply_count`` in step with the number of its direct children.
    """

    __tablename__ = "comment"
    __table_args__ = (
        Index("ix_comment_post_created", "post_id", "created_at"),
        Index("ix_comment_user_created", "user_id", "created_at"),
        Index("ix_comment_parent_created", "parent_comment_id", "created_at"),
        Index("ix_comment_constituency_created", "constituency_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(Integer, ForeignKey("post.id"), nullable=False)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("app_user.id"), nullable=False)
    constituency_id: Mapped[int] = mapped_column(Integer, ForeignKey("constituency.id"), nullable=False)
    # NULL for top-level comments.
    parent_comment_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comment.id"),
        nullable=True,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)
    link: Mapped[str | None] = mapped_column(Text, nullable=True)

    reply_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    dislike_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    replies: Mapped[list[Comment]] = relationship(
        "Comment",
        order_by="Comment.created_at",
        viewonly=True,
    )
    reactions: Mapped[list[CommentReaction]] = relationship(viewonly=True)

    __mapper_args__ = {"version_id_col": version}

    @property
    def is_reply(self) -> bool:
        """Return True when the comment answers another comment."""
        return self.parent_comment_id is not None


class CommentReaction(Base):
    """Per-user like or dislike on a comment.

    Keyed by (comment, user) so a user holds at most one reaction per comment.
    """

    __tablename__ = "comment_reaction"
    __table_args__ = (
        CheckConstraint("kind IN ('like', 'dislike')", name="ck_comment_reaction_kind"),
        Index("ix_comment_reaction_comment_id", "comment_id"),
    )

    comment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("comment.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    kind: Mapped[str] = mapped_column(String(8), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
