"""Repository interfaces for the discussion domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from discuss.domain.repository.forum import ForumRepository
from discuss.domain.repository.post import PostRepository
from discuss.domain.repository.reply import ReplyRepository
from discuss.domain.repository.user import UserRepository
from discuss.domain.repository.vote import VoteRepository

__all__ = [
    "ForumRepository",
    "PostRepository",
    "ReplyRepository",
    "UserRepository",
    "VoteRepository",
]
