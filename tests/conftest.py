"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import uuid4

import logfire

from discuss.domain.model import DiscussionPost, Forum, Reply, User
from discuss.domain.value import (
    ForumId,
    LocalizedText,
    PostId,
    ReplyId,
    Role,
    Slug,
    UserId,
)

# Keep spans local; tests never ship telemetry
logfire.configure(send_to_logfire=False, console=False)

# Fixed base time so ordering in tests never depends on the clock
BASE_TIME = datetime(2026, 3, 1, 9, 0, 0)


def at(minutes: int) -> datetime:
    """Timestamp a number of minutes after BASE_TIME."""
    return BASE_TIME + timedelta(minutes=minutes)


def make_forum(
    slug: str = "vitamins",
    name: str = "Vitamins",
    is_active: bool = True,
    order: int = 0,
) -> Forum:
    """Build a forum with a fresh ID."""
    return Forum(
        id=ForumId(uuid4()),
        slug=Slug(slug),
        name=LocalizedText(az=name, ru=name),
        is_active=is_active,
        order=order,
    )


def make_user(display_name: str = "Leyla", role: Role = Role.USER) -> User:
    """Build a user record with a fresh ID."""
    return User(id=UserId(uuid4()), display_name=display_name, role=role)


def make_post(
    forum_id: ForumId,
    author_id: UserId,
    title: str = "Which vitamins during pregnancy?",
    body: str = "My doctor mentioned folic acid. What else should I take?",
    pinned: bool = False,
    closed: bool = False,
    created_at: datetime | None = None,
) -> DiscussionPost:
    """Build a post with a fresh ID."""
    created = created_at or BASE_TIME
    return DiscussionPost(
        id=PostId(uuid4()),
        forum_id=forum_id,
        author_id=author_id,
        title=title,
        body=body,
        pinned=pinned,
        closed=closed,
        created_at=created,
        updated_at=created,
    )


def make_reply(
    post_id: PostId,
    author_id: UserId,
    parent_id: ReplyId | None = None,
    body: str = "Vitamin D as well.",
    depth: int = 0,
    created_at: datetime | None = None,
    reply_id: ReplyId | None = None,
) -> Reply:
    """Build a reply; pass reply_id to wire up hand-made parent links."""
    created = created_at or BASE_TIME
    return Reply(
        id=reply_id or ReplyId(uuid4()),
        post_id=post_id,
        author_id=author_id,
        parent_id=parent_id,
        body=body,
        depth=depth,
        created_at=created,
        updated_at=created,
    )
