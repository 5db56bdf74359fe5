"""User repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from discuss.domain.model.user import User
from discuss.domain.value import UserId


class UserRepository(ABC):
    """Read access to the account system's user records."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find several users in one query.

        Args:
            user_ids: IDs to look up (duplicates allowed)

        Returns:
            Users that exist, in no particular order
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass
