"""baseline post interaction schema

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from forum_stage.utils.ranking import HOT_RANK_POSTGRES_FUNCTION

# revision identifiers, used by Alembic.
revision: str = "0001_baseline"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _published() -> sa.Column:
    return sa.Column("published", sa.DateTime(timezone=True), nullable=False)


def _user_pair(table: str) -> list[sa.schema.SchemaItem]:
    """Columns and keys shared by the (community|post, user) join tables."""
    parent = "community" if table.startswith("community") else "post"
    return [
        sa.Column(f"{parent}_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint([f"{parent}_id"], [f"{parent}.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["user_.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint(f"{parent}_id", "user_id"),
    ]


def upgrade() -> None:
    """Create users, communities, posts and the vote/save/moderation tables."""
    op.create_table(
        "user_",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("admin", sa.Boolean(), nullable=False),
        sa.Column("banned", sa.Boolean(), nullable=False),
        sa.Column("show_nsfw", sa.Boolean(), nullable=False),
        _published(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "site",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("creator_id", sa.Integer(), nullable=False),
        _published(),
        sa.ForeignKeyConstraint(["creator_id"], ["user_.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "community",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("creator_id", sa.Integer(), nullable=False),
        sa.Column("removed", sa.Boolean(), nullable=False),
        sa.Column("deleted", sa.Boolean(), nullable=False),
        sa.Column("nsfw", sa.Boolean(), nullable=False),
        _published(),
        sa.ForeignKeyConstraint(["creator_id"], ["user_.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    for table in ("community_moderator", "community_user_ban", "community_follower"):
        op.create_table(table, *_user_pair(table), _published())

    op.create_table(
        "post",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("url", sa.Text(), nullable=True),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("creator_id", sa.Integer(), nullable=False),
        sa.Column("community_id", sa.Integer(), nullable=False),
        sa.Column("removed", sa.Boolean(), nullable=False),
        sa.Column("deleted", sa.Boolean(), nullable=False),
        sa.Column("locked", sa.Boolean(), nullable=False),
        sa.Column("nsfw", sa.Boolean(), nullable=False),
        _published(),
        sa.Column("updated", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["community_id"], ["community.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["creator_id"], ["user_.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_post_community_id", "post", ["community_id"])

    op.create_table(
        "post_like",
        *_user_pair("post_like"),
        sa.Column("score", sa.SmallInteger(), nullable=False),
        _published(),
        sa.CheckConstraint("score IN (1, -1)", name="ck_post_like_score"),
    )
    op.create_index("ix_post_like_post_id", "post_like", ["post_id"])
    op.create_table("post_saved", *_user_pair("post_saved"), _published())

    op.create_table(
        "comment",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("creator_id", sa.Integer(), nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("removed", sa.Boolean(), nullable=False),
        sa.Column("deleted", sa.Boolean(), nullable=False),
        _published(),
        sa.Column("updated", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["creator_id"], ["user_.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["comment.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_comment_post_id", "comment", ["post_id"])

    op.create_table(
        "mod_remove_post",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("mod_user_id", sa.Integer(), nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("removed", sa.Boolean(), nullable=True),
        sa.Column("when_", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["mod_user_id"], ["user_.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "mod_lock_post",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("mod_user_id", sa.Integer(), nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("locked", sa.Boolean(), nullable=True),
        sa.Column("when_", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["mod_user_id"], ["user_.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )

    if op.get_bind().dialect.name == "postgresql":
        op.execute(HOT_RANK_POSTGRES_FUNCTION)


def downgrade() -> None:
    """Drop every table created by this revision."""
    if op.get_bind().dialect.name == "postgresql":
        op.execute("DROP FUNCTION IF EXISTS hot_rank(numeric, timestamptz)")
    for table in (
        "mod_lock_post",
        "mod_remove_post",
        "comment",
        "post_saved",
        "post_like",
        "post",
        "community_follower",
        "community_user_ban",
        "community_moderator",
        "community",
        "site",
        "user_",
    ):
        op.drop_table(table)
