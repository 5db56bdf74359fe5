"""Forum repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from discuss.domain.model.forum import Forum
from discuss.domain.value import ForumId, Slug


class ForumRepository(ABC):
    """Repository for Forum entity.

    Forums are written by the admin back-office; the discussion engine
    reads them to validate post targets and to render listings.
    """

    @abstractmethod
    async def find_by_id(self, forum_id: ForumId) -> Optional[Forum]:
        """Find a forum by ID.

        Args:
            forum_id: The forum's unique identifier

        Returns:
            The forum if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Forum]:
        """Find a forum by its unique slug.

        Args:
            slug: The forum slug

        Returns:
            The forum if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, active_only: bool = True) -> List[Forum]:
        """List forums ordered by display order, then creation time.

        Args:
            active_only: Whether to skip inactive forums

        Returns:
            List of forums
        """
        pass

    @abstractmethod
    async def save(self, forum: Forum) -> Forum:
        """Save a forum (create or update).

        Args:
            forum: The forum to save

        Returns:
            The saved forum
        """
        pass
