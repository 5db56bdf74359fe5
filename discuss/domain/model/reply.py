"""Reply entity.

Replies form a forest under each discussion post: a reply either hangs
directly off the post (parent_id is None) or under another reply of the
same post.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel
from discuss.domain.value import PostId, ReplyId, UserId


class Reply(DomainModel):
    """Reply entity.

    Threading is managed through:
    - parent_id: Direct parent reply (None for top-level)
    - depth: Nesting level at creation time (0 for top-level)

    Depth is informational; nesting is bounded when the tree is rendered,
    not when a reply is written.
    """

    id: ReplyId
    post_id: PostId
    author_id: UserId
    parent_id: Optional[ReplyId] = None
    depth: int = Field(default=0, ge=0)
    body: str = Field(min_length=1)
    is_helpful: bool = False
    upvote_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
