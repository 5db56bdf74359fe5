"""PostgreSQL implementation of Post repository."""

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import delete, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.model import DiscussionPost
from discuss.domain.repository import PostRepository
from discuss.domain.value import ForumId, PostId
from discuss.persistence.mappers import post_to_dict, row_to_post
from discuss.persistence.resilience import OperationGuard, guarded_read, guarded_write
from discuss.persistence.tables import forum_posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository.

    Counter changes are single ``UPDATE ... SET c = c + n RETURNING *``
    statements.
    """

    def __init__(self, session: AsyncSession, guard: OperationGuard) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            guard: Timeout and retry policy for this session
        """
        self.session = session
        self.guard = guard

    @guarded_read
    async def find_by_id(self, post_id: PostId) -> Optional[DiscussionPost]:
        """Find a post by ID."""
        stmt = select(forum_posts_table).where(forum_posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    @guarded_read
    async def find_by_forum(
        self,
        forum_id: ForumId,
        limit: int = 20,
        offset: int = 0,
    ) -> List[DiscussionPost]:
        """Find posts of a forum, pinned first, then newest first."""
        stmt = (
            select(forum_posts_table)
            .where(forum_posts_table.c.forum_id == forum_id)
            .order_by(
                desc(forum_posts_table.c.pinned),
                desc(forum_posts_table.c.created_at),
            )
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_post(row._asdict()) for row in result.fetchall()]

    @guarded_read
    async def count_by_forum(self, forum_id: ForumId) -> int:
        """Count posts in a forum."""
        stmt = (
            select(func.count())
            .select_from(forum_posts_table)
            .where(forum_posts_table.c.forum_id == forum_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    @guarded_write
    async def add(self, post: DiscussionPost) -> DiscussionPost:
        """Insert a post inside a savepoint.

        A duplicate ID rolls back only the savepoint, so the request
        transaction stays usable after the IntegrityError.
        """
        stmt = insert(forum_posts_table).values(**post_to_dict(post))
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return post

    async def _update_returning(
        self, post_id: PostId, *conditions: Any, **values: Any
    ) -> Optional[DiscussionPost]:
        stmt = (
            update(forum_posts_table)
            .where(forum_posts_table.c.id == post_id, *conditions)
            .values(**values)
            .returning(forum_posts_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_post(row._asdict()) if row else None

    @guarded_write
    async def update_flags(
        self,
        post_id: PostId,
        pinned: Optional[bool] = None,
        solved: Optional[bool] = None,
    ) -> Optional[DiscussionPost]:
        """Set the pinned and/or solved flags."""
        values: dict[str, Any] = {"updated_at": datetime.now()}
        if pinned is not None:
            values["pinned"] = pinned
        if solved is not None:
            values["solved"] = solved
        return await self._update_returning(post_id, **values)

    @guarded_write
    async def set_closed(
        self, post_id: PostId, closed: bool
    ) -> Optional[DiscussionPost]:
        """Change the closed flag only if it currently differs."""
        stmt = (
            update(forum_posts_table)
            .where(forum_posts_table.c.id == post_id)
            .where(forum_posts_table.c.closed.is_(not closed))
            .values(closed=closed, updated_at=datetime.now())
            .returning(forum_posts_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_post(row._asdict()) if row else None

    @guarded_write
    async def increment_view_count(self, post_id: PostId) -> Optional[DiscussionPost]:
        """Atomically increment view_count by 1."""
        return await self._update_returning(
            post_id, view_count=forum_posts_table.c.view_count + 1
        )

    @guarded_write
    async def add_to_reply_count(
        self,
        post_id: PostId,
        delta: int,
        last_reply_at: Optional[datetime] = None,
        only_if_open: bool = False,
    ) -> Optional[DiscussionPost]:
        """Atomically add delta to reply_count (floored at 0).

        With only_if_open the row is matched only while closed is false, so
        a close committed after the caller read the post wins.
        """
        values: dict[str, Any] = {
            "reply_count": func.greatest(forum_posts_table.c.reply_count + delta, 0)
        }
        if last_reply_at is not None:
            values["last_reply_at"] = last_reply_at
        conditions = [forum_posts_table.c.closed.is_(False)] if only_if_open else []
        return await self._update_returning(post_id, *conditions, **values)

    @guarded_write
    async def add_to_upvote_count(
        self, post_id: PostId, delta: int
    ) -> Optional[DiscussionPost]:
        """Atomically add delta to upvote_count (floored at 0)."""
        return await self._update_returning(
            post_id,
            upvote_count=func.greatest(forum_posts_table.c.upvote_count + delta, 0),
        )

    @guarded_write
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post (hard delete)."""
        stmt = delete(forum_posts_table).where(forum_posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
