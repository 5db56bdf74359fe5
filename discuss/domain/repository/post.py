"""Discussion post repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from discuss.domain.model.post import DiscussionPost
from discuss.domain.value import ForumId, PostId


class PostRepository(ABC):
    """Repository for DiscussionPost aggregate.

    Counters are never written with read-modify-write. Every counter
    change goes through one of the ``increment``/``add_to`` methods, which
    implementations must execute as a single atomic statement.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[DiscussionPost]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_forum(
        self,
        forum_id: ForumId,
        limit: int = 20,
        offset: int = 0,
    ) -> List[DiscussionPost]:
        """Find posts of a forum, pinned posts first, then newest first.

        Args:
            forum_id: The forum ID
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts
        """
        pass

    @abstractmethod
    async def count_by_forum(self, forum_id: ForumId) -> int:
        """Count posts in a forum.

        Args:
            forum_id: The forum ID

        Returns:
            Number of posts
        """
        pass

    @abstractmethod
    async def add(self, post: DiscussionPost) -> DiscussionPost:
        """Insert a new post.

        Args:
            post: The post to insert

        Returns:
            The inserted post

        Raises:
            IntegrityError: If a post with the same ID already exists
        """
        pass

    @abstractmethod
    async def update_flags(
        self,
        post_id: PostId,
        pinned: Optional[bool] = None,
        solved: Optional[bool] = None,
    ) -> Optional[DiscussionPost]:
        """Set the pinned and/or solved flags (None leaves a flag unchanged).

        Args:
            post_id: The post ID
            pinned: New pinned value
            solved: New solved value

        Returns:
            Updated post, or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def set_closed(
        self, post_id: PostId, closed: bool
    ) -> Optional[DiscussionPost]:
        """Conditionally change the closed flag.

        The write only happens if the stored flag differs from ``closed``,
        so of two concurrent closes exactly one succeeds.

        Args:
            post_id: The post ID
            closed: Target value of the flag

        Returns:
            Updated post, or None if the post doesn't exist or the flag
            already had the target value
        """
        pass

    @abstractmethod
    async def increment_view_count(self, post_id: PostId) -> Optional[DiscussionPost]:
        """Atomically increment view_count by 1.

        Args:
            post_id: The post ID

        Returns:
            Updated post, or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def add_to_reply_count(
        self,
        post_id: PostId,
        delta: int,
        last_reply_at: Optional[datetime] = None,
        only_if_open: bool = False,
    ) -> Optional[DiscussionPost]:
        """Atomically add delta to reply_count (never below 0).

        Args:
            post_id: The post ID
            delta: Amount to add (negative to subtract)
            last_reply_at: New last reply timestamp, if any
            only_if_open: Leave the post untouched if it is closed

        Returns:
            Updated post, or None if the post doesn't exist (or is closed
            when only_if_open is set)
        """
        pass

    @abstractmethod
    async def add_to_upvote_count(
        self, post_id: PostId, delta: int
    ) -> Optional[DiscussionPost]:
        """Atomically add delta to upvote_count (never below 0).

        Args:
            post_id: The post ID
            delta: Amount to add (negative to subtract)

        Returns:
            Updated post, or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post (hard delete).

        Args:
            post_id: The post ID to delete

        Returns:
            True if a post was deleted
        """
        pass
