"""PostgreSQL persistence providers: engine, request session and repositories."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from discuss.config import DatabaseSettings, Settings
from discuss.domain.repository import (
    ForumRepository,
    PostRepository,
    ReplyRepository,
    UserRepository,
    VoteRepository,
)
from discuss.persistence.database import create_engine, create_session_factory
from discuss.persistence.repository import (
    PostgresForumRepository,
    PostgresPostRepository,
    PostgresReplyRepository,
    PostgresUserRepository,
    PostgresVoteRepository,
)
from discuss.persistence.resilience import OperationGuard
from discuss.util.di.base import ProviderBase
from discuss.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide the pooled engine, disposed when the container closes."""
        engine = create_engine(settings.database, echo=settings.debug)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()
        logfire.info("Database engine disposed")

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """One transaction per request.

        Committed when the request finishes cleanly, rolled back when it
        raises. Savepoints opened by repositories live inside it.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn(
                    "Request transaction rolled back", error_type=type(e).__name__
                )
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_operation_guard(
        self, session: AsyncSession, database_settings: DatabaseSettings
    ) -> OperationGuard:
        """Provide timeout and retry policy for the request session."""
        return OperationGuard(session, database_settings)

    @provide(scope=Scope.REQUEST)
    def get_forum_repository(
        self, session: AsyncSession, guard: OperationGuard
    ) -> ForumRepository:
        """Provide Forum repository."""
        return PostgresForumRepository(session, guard)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(
        self, session: AsyncSession, guard: OperationGuard
    ) -> PostRepository:
        """Provide Post repository."""
        return PostgresPostRepository(session, guard)

    @provide(scope=Scope.REQUEST)
    def get_reply_repository(
        self, session: AsyncSession, guard: OperationGuard
    ) -> ReplyRepository:
        """Provide Reply repository."""
        return PostgresReplyRepository(session, guard)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(
        self, session: AsyncSession, guard: OperationGuard
    ) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session, guard)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(
        self, session: AsyncSession, guard: OperationGuard
    ) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session, guard)
