"""initial schema

Revision ID: 3c1f2a9d7b10
Revises:
Create Date: 2026-10-17 10:12:44.318209

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1f2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create constituency, discussion and reference tables."""
    op.create_table(
        "constituency",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("area_name", sa.String(length=100), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("last_election_vote_percentage", sa.String(length=16), nullable=False),
        sa.Column("experience", sa.Integer(), nullable=False),
        sa.Column("party_name", sa.String(length=32), nullable=False),
        sa.Column("party_icon_url", sa.Text(), nullable=False),
        sa.Column("manifesto_link", sa.Text(), nullable=False),
        sa.Column("manifesto_score", sa.Integer(), nullable=False),
        sa.Column("metadata", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_constituency_area_name", "constituency", ["area_name"], unique=True)

    op.create_table(
        "vidhayak_survey_question",
        sa.Column("pk", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("constituency_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("yes_votes", sa.Integer(), nullable=False),
        sa.Column("no_votes", sa.Integer(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["constituency_id"], ["constituency.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("pk"),
        sa.UniqueConstraint("constituency_id", "position"),
    )
    op.create_table(
        "department",
        sa.Column("pk", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("constituency_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("dept_name", sa.Text(), nullable=False),
        sa.Column("work_info", sa.JSON(), nullable=False),
        sa.Column("average_score", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["constituency_id"], ["constituency.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("pk"),
        sa.UniqueConstraint("constituency_id", "id"),
    )
    op.create_table(
        "department_survey_question",
        sa.Column("pk", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("department_pk", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("rating_1", sa.Integer(), nullable=False),
        sa.Column("rating_2", sa.Integer(), nullable=False),
        sa.Column("rating_3", sa.Integer(), nullable=False),
        sa.Column("rating_4", sa.Integer(), nullable=False),
        sa.Column("rating_5", sa.Integer(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["department_pk"], ["department.pk"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("pk"),
        sa.UniqueConstraint("department_pk", "position"),
    )
    op.create_table(
        "other_candidate",
        sa.Column("pk", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("constituency_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("candidate_name", sa.Text(), nullable=False),
        sa.Column("candidate_image_url", sa.Text(), nullable=False),
        sa.Column("candidate_party", sa.String(length=32), nullable=False),
        sa.Column("vote_share", sa.String(length=16), nullable=False),
        sa.ForeignKeyConstraint(["constituency_id"], ["constituency.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("pk"),
    )
    op.create_table(
        "latest_news",
        sa.Column("pk", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("constituency_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["constituency_id"], ["constituency.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("pk"),
    )

    op.create_table(
        "app_user",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("phone_number", sa.String(length=32), nullable=False),
        sa.Column("email", sa.String(length=254), nullable=True),
        sa.Column("constituency_id", sa.Integer(), nullable=True),
        sa.Column("profile_image", sa.Text(), nullable=True),
        sa.Column("role", sa.String(length=16), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["constituency_id"], ["constituency.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_app_user_phone_number", "app_user", ["phone_number"])
    op.create_table(
        "category",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("used_count", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "post",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("constituency_id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=True),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("link", sa.Text(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("views", sa.Integer(), nullable=False),
        sa.Column("comment_count", sa.Integer(), nullable=False),
        sa.Column("like_count", sa.Integer(), nullable=False),
        sa.Column("dislike_count", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["author_id"], ["app_user.id"]),
        sa.ForeignKeyConstraint(["category_id"], ["category.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["constituency_id"], ["constituency.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_post_constituency_created", "post", ["constituency_id", "created_at"])
    op.create_index("ix_post_author_created", "post", ["author_id", "created_at"])
    op.create_table(
        "post_reaction",
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("kind", sa.String(length=8), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("kind IN ('like', 'dislike')", name="ck_post_reaction_kind"),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id", "user_id"),
    )
    op.create_index("ix_post_reaction_post_id", "post_reaction", ["post_id"])

    op.create_table(
        "comment",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("constituency_id", sa.Integer(), nullable=False),
        sa.Column("parent_comment_id", sa.Integer(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("link", sa.Text(), nullable=True),
        sa.Column("reply_count", sa.Integer(), nullable=False),
        sa.Column("like_count", sa.Integer(), nullable=False),
        sa.Column("dislike_count", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["constituency_id"], ["constituency.id"]),
        sa.ForeignKeyConstraint(["parent_comment_id"], ["comment.id"]),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_comment_post_created", "comment", ["post_id", "created_at"])
    op.create_index("ix_comment_user_created", "comment", ["user_id", "created_at"])
    op.create_index("ix_comment_parent_created", "comment", ["parent_comment_id", "created_at"])
    op.create_index("ix_comment_constituency_created", "comment", ["constituency_id", "created_at"])
    op.create_table(
        "comment_reaction",
        sa.Column("comment_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("kind", sa.String(length=8), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("kind IN ('like', 'dislike')", name="ck_comment_reaction_kind"),
        sa.ForeignKeyConstraint(["comment_id"], ["comment.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("comment_id", "user_id"),
    )
    op.create_index("ix_comment_reaction_comment_id", "comment_reaction", ["comment_id"])


def downgrade() -> None:
    """Drop every table in reverse dependency order."""
    for table in (
        "comment_reaction",
        "comment",
        "post_reaction",
        "post",
        "category",
        "app_user",
        "latest_news",
        "other_candidate",
        "department_survey_question",
        "department",
        "vidhayak_survey_question",
        "constituency",
    ):
        op.drop_table(table)
