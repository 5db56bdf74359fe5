"""PostgreSQL repository implementations."""

from discuss.persistence.repository.forum import PostgresForumRepository
from discuss.persistence.repository.post import PostgresPostRepository
from discuss.persistence.repository.reply import PostgresReplyRepository
from discuss.persistence.repository.user import PostgresUserRepository
from discuss.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresForumRepository",
    "PostgresPostRepository",
    "PostgresReplyRepository",
    "PostgresUserRepository",
    "PostgresVoteRepository",
]
