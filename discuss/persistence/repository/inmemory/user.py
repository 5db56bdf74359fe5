"""In-memory user repository for testing."""

from typing import Optional, Sequence

from discuss.domain.model.user import User
from discuss.domain.repository.user import UserRepository
from discuss.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}
        # Number of lookups served, for asserting batched access in tests
        self.lookup_count = 0

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        self.lookup_count += 1
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        self.lookup_count += 1
        return [self._users[uid] for uid in set(user_ids) if uid in self._users]

    async def save(self, user: User) -> User:
        self._users[user.id] = user
        return user
