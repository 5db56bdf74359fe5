"""Reply repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from discuss.domain.model.reply import Reply
from discuss.domain.value import PostId, ReplyId


class ReplyRepository(ABC):
    """Repository for Reply entity.

    Defines the contract for reply persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID.

        Args:
            reply_id: The reply's unique identifier

        Returns:
            The reply if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> List[Reply]:
        """Find all replies of a post as a flat list in creation order.

        Args:
            post_id: The post ID

        Returns:
            List of replies, oldest first
        """
        pass

    @abstractmethod
    async def add(self, reply: Reply) -> Reply:
        """Insert a new reply.

        Args:
            reply: The reply to insert

        Returns:
            The inserted reply

        Raises:
            IntegrityError: If a reply with the same ID already exists
        """
        pass

    @abstractmethod
    async def update_body(self, reply_id: ReplyId, body: str) -> Optional[Reply]:
        """Replace the body of a reply.

        Args:
            reply_id: The reply ID
            body: New body text

        Returns:
            Updated reply, or None if the reply doesn't exist
        """
        pass

    @abstractmethod
    async def add_to_upvote_count(
        self, reply_id: ReplyId, delta: int
    ) -> Optional[Reply]:
        """Atomically add delta to upvote_count (never below 0).

        Args:
            reply_id: The reply ID
            delta: Amount to add (negative to subtract)

        Returns:
            Updated reply, or None if the reply doesn't exist
        """
        pass

    @abstractmethod
    async def delete_subtree(self, reply_id: ReplyId) -> List[ReplyId]:
        """Delete a reply and every reply beneath it (hard delete).

        Args:
            reply_id: Root of the subtree

        Returns:
            IDs of the deleted replies, empty if the root doesn't exist
        """
        pass

    @abstractmethod
    async def delete_by_post(self, post_id: PostId) -> List[ReplyId]:
        """Delete every reply of a post.

        Args:
            post_id: The post ID

        Returns:
            IDs of the deleted replies
        """
        pass
