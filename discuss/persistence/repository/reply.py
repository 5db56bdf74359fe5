"""PostgreSQL implementation of Reply repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.model import Reply
from discuss.domain.repository import ReplyRepository
from discuss.domain.value import PostId, ReplyId
from discuss.persistence.mappers import reply_to_dict, row_to_reply
from discuss.persistence.resilience import OperationGuard, guarded_read, guarded_write
from discuss.persistence.tables import forum_replies_table


class PostgresReplyRepository(ReplyRepository):
    """PostgreSQL implementation of ReplyRepository."""

    def __init__(self, session: AsyncSession, guard: OperationGuard) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            guard: Timeout and retry policy for this session
        """
        self.session = session
        self.guard = guard

    @guarded_read
    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID."""
        stmt = select(forum_replies_table).where(forum_replies_table.c.id == reply_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_reply(row._asdict()) if row else None

    @guarded_read
    async def find_by_post(self, post_id: PostId) -> List[Reply]:
        """Find all replies of a post, oldest first."""
        stmt = (
            select(forum_replies_table)
            .where(forum_replies_table.c.post_id == post_id)
            .order_by(forum_replies_table.c.created_at, forum_replies_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_reply(row._asdict()) for row in result.fetchall()]

    @guarded_write
    async def add(self, reply: Reply) -> Reply:
        """Insert a reply inside a savepoint."""
        stmt = insert(forum_replies_table).values(**reply_to_dict(reply))
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return reply

    @guarded_write
    async def update_body(self, reply_id: ReplyId, body: str) -> Optional[Reply]:
        """Replace the body of a reply."""
        stmt = (
            update(forum_replies_table)
            .where(forum_replies_table.c.id == reply_id)
            .values(body=body, updated_at=datetime.now())
            .returning(forum_replies_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            return None

        await self.session.flush()
        return row_to_reply(row._asdict())

    @guarded_write
    async def add_to_upvote_count(
        self, reply_id: ReplyId, delta: int
    ) -> Optional[Reply]:
        """Atomically add delta to upvote_count (floored at 0)."""
        stmt = (
            update(forum_replies_table)
            .where(forum_replies_table.c.id == reply_id)
            .values(
                upvote_count=func.greatest(
                    forum_replies_table.c.upvote_count + delta, 0
                )
            )
            .returning(forum_replies_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_reply(row._asdict()) if row else None

    @guarded_write
    async def delete_subtree(self, reply_id: ReplyId) -> List[ReplyId]:
        """Delete a reply and its descendants in one statement.

        A recursive CTE over parent_id collects the subtree and the DELETE
        returns exactly the rows it removed.
        """
        replies = forum_replies_table
        subtree = (
            select(replies.c.id)
            .where(replies.c.id == reply_id)
            .cte("subtree", recursive=True)
        )
        child = replies.alias("child")
        # UNION, not UNION ALL: stops on a parent-pointer cycle
        subtree = subtree.union(
            select(child.c.id).where(child.c.parent_id == subtree.c.id)
        )

        stmt = (
            delete(replies)
            .where(replies.c.id.in_(select(subtree.c.id)))
            .returning(replies.c.id)
        )
        result = await self.session.execute(stmt)
        deleted = [ReplyId(row.id) for row in result.fetchall()]
        await self.session.flush()
        return deleted

    @guarded_write
    async def delete_by_post(self, post_id: PostId) -> List[ReplyId]:
        """Delete every reply of a post."""
        locked = await self.session.execute(
            select(forum_replies_table.c.id)
            .where(forum_replies_table.c.post_id == post_id)
            .with_for_update()
        )
        deleted = [ReplyId(row.id) for row in locked.fetchall()]

        stmt = delete(forum_replies_table).where(
            forum_replies_table.c.post_id == post_id
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return deleted
