"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Union

from discuss.domain.model.vote import Vote
from discuss.domain.value import PostId, ReplyId, UserId, VotableType


class VoteRepository(ABC):
    """Repository for Vote entity.

    Implementations must enforce uniqueness of (user_id, votable_type,
    votable_id) at the storage level. The application never checks for an
    existing vote before inserting.
    """

    @abstractmethod
    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, ReplyId],
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item.

        Args:
            user_id: The user's ID
            votable_type: Type of item (post or reply)
            votable_id: ID of the item

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[Union[PostId, ReplyId]],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query).

        Args:
            user_id: The user's ID
            votable_type: Type of items (post or reply)
            votable_ids: List of item IDs to check

        Returns:
            List of votes by the user on the specified items
        """
        pass

    @abstractmethod
    async def add(self, vote: Vote) -> Vote:
        """Insert a vote.

        Args:
            vote: The vote to insert

        Returns:
            The inserted vote

        Raises:
            IntegrityError: If the user already voted on this item
        """
        pass

    @abstractmethod
    async def delete_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, ReplyId],
    ) -> bool:
        """Delete a vote by user and votable.

        Args:
            user_id: The user's ID
            votable_type: Type of item (post or reply)
            votable_id: ID of the item

        Returns:
            True if a vote was deleted, False if no vote existed
        """
        pass

    @abstractmethod
    async def delete_by_votables(
        self,
        votable_type: VotableType,
        votable_ids: Sequence[Union[PostId, ReplyId]],
    ) -> int:
        """Delete all votes on the given items.

        Args:
            votable_type: Type of items (post or reply)
            votable_ids: IDs of the items

        Returns:
            Number of votes deleted
        """
        pass

    @abstractmethod
    async def count_by_votable(
        self,
        votable_type: VotableType,
        votable_id: Union[PostId, ReplyId],
    ) -> int:
        """Count votes on a specific item.

        Args:
            votable_type: Type of item (post or reply)
            votable_id: ID of the item

        Returns:
            Number of votes
        """
        pass
