"""Discussion post aggregate root.

A discussion post is a top-level thread inside a forum. It carries three
independent lifecycle flags (pinned, solved, closed) and denormalized
counters that are only ever changed through atomic storage increments.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel
from discuss.domain.value import ForumId, PostId, UserId


class DiscussionPost(DomainModel):
    """Discussion post aggregate root.

    Business rules:
    - A closed post accepts no new replies
    - Only admins pin/unpin; only the owner closes
    - reply_count tracks the number of live replies on the post
    """

    id: PostId
    forum_id: ForumId
    author_id: UserId
    title: str = Field(min_length=1)
    body: str = Field(min_length=1)
    pinned: bool = False
    solved: bool = False
    closed: bool = False
    view_count: int = Field(default=0, ge=0)
    upvote_count: int = Field(default=0, ge=0)
    downvote_count: int = Field(default=0, ge=0)
    reply_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    last_reply_at: Optional[datetime] = None
