"""In-memory repository implementations for testing and local runs."""

from .forum import InMemoryForumRepository
from .post import InMemoryPostRepository
from .reply import InMemoryReplyRepository
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryForumRepository",
    "InMemoryPostRepository",
    "InMemoryReplyRepository",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
