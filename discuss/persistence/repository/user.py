"""PostgreSQL implementation of User repository."""

from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.model import User
from discuss.domain.repository import UserRepository
from discuss.domain.value import UserId
from discuss.persistence.mappers import row_to_user, user_to_dict
from discuss.persistence.resilience import OperationGuard, guarded_read, guarded_write
from discuss.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession, guard: OperationGuard) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            guard: Timeout and retry policy for this session
        """
        self.session = session
        self.guard = guard

    @guarded_read
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    @guarded_read
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find several users with one IN query."""
        if not user_ids:
            return []

        stmt = select(users_table).where(users_table.c.id.in_(set(user_ids)))
        result = await self.session.execute(stmt)
        return [row_to_user(row._asdict()) for row in result.fetchall()]

    @guarded_write
    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        user_dict = user_to_dict(user)
        stmt = insert(users_table).values(**user_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={k: v for k, v in user_dict.items() if k != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return user
