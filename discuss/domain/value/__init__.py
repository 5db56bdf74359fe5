"""Domain value objects for the discussion forums."""

from discuss.domain.value.identifiers import (
    derive_id,
    ForumId,
    PostId,
    ReplyId,
    UserId,
    VoteId,
)
from discuss.domain.value.types import (
    LocalizedText,
    Role,
    Slug,
    VotableType,
    VoteType,
)

__all__ = [
    "derive_id",
    # Identifiers
    "UserId",
    "ForumId",
    "PostId",
    "ReplyId",
    "VoteId",
    # Types
    "LocalizedText",
    "Role",
    "Slug",
    "VoteType",
    "VotableType",
]
