"""Mock persistence providers for testing."""

from dishka import Scope, provide

from discuss.domain.repository import (
    ForumRepository,
    PostRepository,
    ReplyRepository,
    UserRepository,
    VoteRepository,
)
from discuss.persistence.repository.inmemory import (
    InMemoryForumRepository,
    InMemoryPostRepository,
    InMemoryReplyRepository,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from discuss.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Repositories are APP-scoped so that every request against one container
    sees the same data. Each test builds its own container, which keeps
    tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_forum_repository(self) -> ForumRepository:
        """Provide in-memory forum repository."""
        return InMemoryForumRepository()

    @provide(scope=Scope.APP)
    def get_post_repository(self) -> PostRepository:
        """Provide in-memory post repository."""
        return InMemoryPostRepository()

    @provide(scope=Scope.APP)
    def get_reply_repository(self) -> ReplyRepository:
        """Provide in-memory reply repository."""
        return InMemoryReplyRepository()

    @provide(scope=Scope.APP)
    def get_vote_repository(self) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository()

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()
