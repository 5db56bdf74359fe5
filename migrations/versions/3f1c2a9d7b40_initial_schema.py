"""initial_schema

Create the schema for the discussion forums:
- Users (profiles owned by the account system, read here for display)
- Forums (localized catalog entries with display order)
- Forum posts (pinned, solved and closed flags with denormalized counters)
- Forum replies (nested via parent_id, depth stored per row)
- Forum votes (one upvote per user per post or reply)

Revision ID: 3f1c2a9d7b40
Revises:
Create Date: 2026-10-18 10:12:44.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _create_enum(name: str, *values: str) -> None:
    labels = ", ".join(f"'{value}'" for value in values)
    op.execute(f"""
        DO $$ BEGIN
            CREATE TYPE {name} AS ENUM ({labels});
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    _create_enum("user_role", "user", "author", "admin")
    _create_enum("forum_votable_type", "post", "reply")
    _create_enum("forum_vote_type", "up")

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column(
            "role",
            postgresql.ENUM(
                "user", "author", "admin", name="user_role", create_type=False
            ),
            nullable=False,
            server_default="user",
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    # ========================================================================
    # FORUMS table
    # ========================================================================
    op.create_table(
        "forums",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("name_az", sa.String(255), nullable=False),
        sa.Column("name_ru", sa.String(255), nullable=False, server_default=""),
        sa.Column("description_az", sa.Text(), nullable=True),
        sa.Column("description_ru", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(100), nullable=True),
        sa.Column("color", sa.String(50), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("post_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_forums_slug", "forums", ["slug"], unique=True)
    op.create_index("idx_forums_display_order", "forums", ["display_order"])

    # ========================================================================
    # FORUM_POSTS table
    # ========================================================================
    op.create_table(
        "forum_posts",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("forum_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("pinned", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("solved", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("closed", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("upvote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("downvote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reply_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.Column("last_reply_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["forum_id"], ["forums.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "view_count >= 0 AND upvote_count >= 0 AND downvote_count >= 0 "
            "AND reply_count >= 0",
            name="forum_post_counters_non_negative",
        ),
    )
    op.create_index(
        "idx_forum_posts_listing",
        "forum_posts",
        ["forum_id", sa.text("pinned DESC"), sa.text("created_at DESC")],
    )
    op.create_index("idx_forum_posts_author_id", "forum_posts", ["author_id"])

    # ========================================================================
    # FORUM_REPLIES table
    # ========================================================================
    op.create_table(
        "forum_replies",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("depth", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_helpful", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("upvote_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["post_id"], ["forum_posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["parent_id"], ["forum_replies.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("depth >= 0", name="forum_reply_depth_non_negative"),
        sa.CheckConstraint(
            "upvote_count >= 0", name="forum_reply_upvotes_non_negative"
        ),
    )
    op.create_index(
        "idx_forum_replies_post_created", "forum_replies", ["post_id", "created_at"]
    )
    op.create_index("idx_forum_replies_parent_id", "forum_replies", ["parent_id"])

    # ========================================================================
    # FORUM_VOTES table
    # ========================================================================
    op.create_table(
        "forum_votes",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "votable_type",
            postgresql.ENUM(
                "post", "reply", name="forum_votable_type", create_type=False
            ),
            nullable=False,
        ),
        sa.Column("votable_id", sa.UUID(), nullable=False),
        sa.Column(
            "vote_type",
            postgresql.ENUM("up", name="forum_vote_type", create_type=False),
            nullable=False,
            server_default="up",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "votable_type", "votable_id", name="unique_forum_vote"
        ),
    )
    op.create_index(
        "idx_forum_votes_votable", "forum_votes", ["votable_type", "votable_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("forum_votes")
    op.drop_table("forum_replies")
    op.drop_table("forum_posts")
    op.drop_table("forums")
    op.drop_table("users")

    op.execute("DROP TYPE IF EXISTS forum_vote_type")
    op.execute("DROP TYPE IF EXISTS forum_votable_type")
    op.execute("DROP TYPE IF EXISTS user_role")
