"""In-memory post repository for testing."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError

from discuss.domain.model.post import DiscussionPost
from discuss.domain.repository.post import PostRepository
from discuss.domain.value import ForumId, PostId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing.

    No method awaits between reading and writing a post, so every update
    is atomic with respect to other coroutines.
    """

    def __init__(self) -> None:
        self._posts: dict[PostId, DiscussionPost] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[DiscussionPost]:
        return self._posts.get(post_id)

    async def find_by_forum(
        self,
        forum_id: ForumId,
        limit: int = 20,
        offset: int = 0,
    ) -> list[DiscussionPost]:
        """Find posts of a forum, pinned first, then newest first."""
        posts = [p for p in self._posts.values() if p.forum_id == forum_id]
        posts.sort(key=lambda p: (p.pinned, p.created_at), reverse=True)
        return posts[offset : offset + limit]

    async def count_by_forum(self, forum_id: ForumId) -> int:
        return sum(1 for p in self._posts.values() if p.forum_id == forum_id)

    async def add(self, post: DiscussionPost) -> DiscussionPost:
        """Insert a post.

        Raises:
            IntegrityError: If the ID is taken
        """
        if post.id in self._posts:
            raise IntegrityError("Duplicate post", None, Exception())
        self._posts[post.id] = post
        return post

    def _update(self, post_id: PostId, **changes: Any) -> Optional[DiscussionPost]:
        post = self._posts.get(post_id)
        if not post:
            return None
        updated = post.model_copy(update=changes)
        self._posts[post_id] = updated
        return updated

    async def update_flags(
        self,
        post_id: PostId,
        pinned: Optional[bool] = None,
        solved: Optional[bool] = None,
    ) -> Optional[DiscussionPost]:
        changes: dict[str, Any] = {"updated_at": datetime.now()}
        if pinned is not None:
            changes["pinned"] = pinned
        if solved is not None:
            changes["solved"] = solved
        return self._update(post_id, **changes)

    async def set_closed(
        self, post_id: PostId, closed: bool
    ) -> Optional[DiscussionPost]:
        post = self._posts.get(post_id)
        if not post or post.closed == closed:
            return None
        return self._update(post_id, closed=closed, updated_at=datetime.now())

    async def increment_view_count(self, post_id: PostId) -> Optional[DiscussionPost]:
        post = self._posts.get(post_id)
        if not post:
            return None
        return self._update(post_id, view_count=post.view_count + 1)

    async def add_to_reply_count(
        self,
        post_id: PostId,
        delta: int,
        last_reply_at: Optional[datetime] = None,
        only_if_open: bool = False,
    ) -> Optional[DiscussionPost]:
        post = self._posts.get(post_id)
        if not post or (only_if_open and post.closed):
            return None
        changes: dict[str, Any] = {"reply_count": max(0, post.reply_count + delta)}
        if last_reply_at is not None:
            changes["last_reply_at"] = last_reply_at
        return self._update(post_id, **changes)

    async def add_to_upvote_count(
        self, post_id: PostId, delta: int
    ) -> Optional[DiscussionPost]:
        post = self._posts.get(post_id)
        if not post:
            return None
        return self._update(post_id, upvote_count=max(0, post.upvote_count + delta))

    async def delete(self, post_id: PostId) -> bool:
        return self._posts.pop(post_id, None) is not None
