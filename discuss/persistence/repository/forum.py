"""PostgreSQL implementation of Forum repository."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.model import Forum
from discuss.domain.repository import ForumRepository
from discuss.domain.value import ForumId, Slug
from discuss.persistence.mappers import forum_to_dict, row_to_forum
from discuss.persistence.resilience import OperationGuard, guarded_read, guarded_write
from discuss.persistence.tables import forums_table


class PostgresForumRepository(ForumRepository):
    """PostgreSQL implementation of ForumRepository."""

    def __init__(self, session: AsyncSession, guard: OperationGuard) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            guard: Timeout and retry policy for this session
        """
        self.session = session
        self.guard = guard

    @guarded_read
    async def find_by_id(self, forum_id: ForumId) -> Optional[Forum]:
        """Find a forum by ID."""
        stmt = select(forums_table).where(forums_table.c.id == forum_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_forum(row._asdict()) if row else None

    @guarded_read
    async def find_by_slug(self, slug: Slug) -> Optional[Forum]:
        """Find a forum by slug."""
        stmt = select(forums_table).where(forums_table.c.slug == slug.root)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_forum(row._asdict()) if row else None

    @guarded_read
    async def find_all(self, active_only: bool = True) -> List[Forum]:
        """List forums by display order, then creation time."""
        stmt = select(forums_table)
        if active_only:
            stmt = stmt.where(forums_table.c.is_active.is_(True))
        stmt = stmt.order_by(forums_table.c.display_order, forums_table.c.created_at)

        result = await self.session.execute(stmt)
        return [row_to_forum(row._asdict()) for row in result.fetchall()]

    @guarded_write
    async def save(self, forum: Forum) -> Forum:
        """Save a forum (create or update)."""
        forum_dict = forum_to_dict(forum)
        stmt = insert(forums_table).values(**forum_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[forums_table.c.id],
            set_={k: v for k, v in forum_dict.items() if k != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return forum
