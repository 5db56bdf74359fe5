"""Domain model entities for the discussion forums."""

from discuss.domain.model.forum import Forum
from discuss.domain.model.post import DiscussionPost
from discuss.domain.model.reply import Reply
from discuss.domain.model.user import ANONYMOUS_DISPLAY_NAME, User, UserProfileSummary
from discuss.domain.model.vote import Vote

__all__ = [
    "ANONYMOUS_DISPLAY_NAME",
    "Forum",
    "DiscussionPost",
    "Reply",
    "Vote",
    "User",
    "UserProfileSummary",
]
