"""SQLAlchemy table definitions for the discussion forums.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (owned by the account system, read-only here)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("display_name", String(255), nullable=False),
    Column("avatar_url", Text, nullable=True),
    Column(
        "role",
        Enum("user", "author", "admin", name="user_role", create_type=False),
        nullable=False,
        server_default="user",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# FORUMS TABLE
# ============================================================================
forums_table = Table(
    "forums",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("slug", String(100), nullable=False),
    Column("name_az", String(255), nullable=False),
    Column("name_ru", String(255), nullable=False, server_default=""),
    Column("description_az", Text, nullable=True),
    Column("description_ru", Text, nullable=True),
    Column("icon", String(100), nullable=True),
    Column("color", String(50), nullable=True),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("display_order", Integer, nullable=False, server_default="0"),
    Column("post_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_forums_slug", forums_table.c.slug, unique=True)
Index("idx_forums_display_order", forums_table.c.display_order)

# ============================================================================
# FORUM POSTS TABLE
# ============================================================================
# author_id has no foreign key: accounts may be removed while their posts stay
forum_posts_table = Table(
    "forum_posts",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "forum_id", UUID, ForeignKey("forums.id", ondelete="CASCADE"), nullable=False
    ),
    Column("author_id", UUID, nullable=False),
    Column("title", String(300), nullable=False),
    Column("body", Text, nullable=False),
    Column("pinned", Boolean, nullable=False, server_default="false"),
    Column("solved", Boolean, nullable=False, server_default="false"),
    Column("closed", Boolean, nullable=False, server_default="false"),
    Column("view_count", Integer, nullable=False, server_default="0"),
    Column("upvote_count", Integer, nullable=False, server_default="0"),
    Column("downvote_count", Integer, nullable=False, server_default="0"),
    Column("reply_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("last_reply_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        "view_count >= 0 AND upvote_count >= 0 AND downvote_count >= 0 "
        "AND reply_count >= 0",
        name="forum_post_counters_non_negative",
    ),
)

Index(
    "idx_forum_posts_listing",
    forum_posts_table.c.forum_id,
    forum_posts_table.c.pinned.desc(),
    forum_posts_table.c.created_at.desc(),
)
Index("idx_forum_posts_author_id", forum_posts_table.c.author_id)

# ============================================================================
# FORUM REPLIES TABLE
# ============================================================================
forum_replies_table = Table(
    "forum_replies",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "post_id", UUID, ForeignKey("forum_posts.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "parent_id",
        UUID,
        ForeignKey("forum_replies.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("author_id", UUID, nullable=False),
    Column("body", Text, nullable=False),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column("is_helpful", Boolean, nullable=False, server_default="false"),
    Column("upvote_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("depth >= 0", name="forum_reply_depth_non_negative"),
    CheckConstraint("upvote_count >= 0", name="forum_reply_upvotes_non_negative"),
)

Index(
    "idx_forum_replies_post_created",
    forum_replies_table.c.post_id,
    forum_replies_table.c.created_at,
)
Index("idx_forum_replies_parent_id", forum_replies_table.c.parent_id)

# ============================================================================
# FORUM VOTES TABLE
# ============================================================================
forum_votes_table = Table(
    "forum_votes",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("user_id", UUID, nullable=False),
    Column(
        "votable_type",
        Enum("post", "reply", name="forum_votable_type", create_type=False),
        nullable=False,
    ),
    Column("votable_id", UUID, nullable=False),
    Column(
        "vote_type",
        Enum("up", name="forum_vote_type", create_type=False),
        nullable=False,
        server_default="up",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "votable_type", "votable_id", name="unique_forum_vote"),
)

Index(
    "idx_forum_votes_votable",
    forum_votes_table.c.votable_type,
    forum_votes_table.c.votable_id,
)
