"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence, Union

from sqlalchemy import and_, delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.model import Vote
from discuss.domain.repository import VoteRepository
from discuss.domain.value import PostId, ReplyId, UserId, VotableType
from discuss.persistence.mappers import row_to_vote, vote_to_dict
from discuss.persistence.resilience import OperationGuard, guarded_read, guarded_write
from discuss.persistence.tables import forum_votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession, guard: OperationGuard) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            guard: Timeout and retry policy for this session
        """
        self.session = session
        self.guard = guard

    @guarded_read
    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, ReplyId],
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item."""
        stmt = select(forum_votes_table).where(
            and_(
                forum_votes_table.c.user_id == user_id,
                forum_votes_table.c.votable_type == votable_type.value,
                forum_votes_table.c.votable_id == votable_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    @guarded_read
    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[Union[PostId, ReplyId]],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        stmt = select(forum_votes_table).where(
            and_(
                forum_votes_table.c.user_id == user_id,
                forum_votes_table.c.votable_type == votable_type.value,
                forum_votes_table.c.votable_id.in_(votable_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    @guarded_write
    async def add(self, vote: Vote) -> Vote:
        """Insert a vote inside a savepoint.

        The unique_forum_vote constraint turns a second vote into an
        IntegrityError without aborting the request transaction.
        """
        stmt = insert(forum_votes_table).values(**vote_to_dict(vote))
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return vote

    @guarded_write
    async def delete_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, ReplyId],
    ) -> bool:
        """Delete a vote by user and votable."""
        stmt = delete(forum_votes_table).where(
            and_(
                forum_votes_table.c.user_id == user_id,
                forum_votes_table.c.votable_type == votable_type.value,
                forum_votes_table.c.votable_id == votable_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    @guarded_write
    async def delete_by_votables(
        self,
        votable_type: VotableType,
        votable_ids: Sequence[Union[PostId, ReplyId]],
    ) -> int:
        """Delete all votes on the given items."""
        if not votable_ids:
            return 0

        stmt = delete(forum_votes_table).where(
            and_(
                forum_votes_table.c.votable_type == votable_type.value,
                forum_votes_table.c.votable_id.in_(votable_ids),
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    @guarded_read
    async def count_by_votable(
        self,
        votable_type: VotableType,
        votable_id: Union[PostId, ReplyId],
    ) -> int:
        """Count votes on a specific item."""
        stmt = (
            select(func.count())
            .select_from(forum_votes_table)
            .where(forum_votes_table.c.votable_type == votable_type.value)
            .where(forum_votes_table.c.votable_id == votable_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
