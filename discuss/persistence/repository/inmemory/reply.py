"""In-memory reply repository for testing."""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from discuss.domain.model.reply import Reply
from discuss.domain.repository.reply import ReplyRepository
from discuss.domain.value import PostId, ReplyId


class InMemoryReplyRepository(ReplyRepository):
    """In-memory implementation of ReplyRepository for testing."""

    def __init__(self) -> None:
        self._replies: dict[ReplyId, Reply] = {}

    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        return self._replies.get(reply_id)

    async def find_by_post(self, post_id: PostId) -> list[Reply]:
        """Find all replies of a post, oldest first."""
        replies = [r for r in self._replies.values() if r.post_id == post_id]
        # Stable sort keeps insertion order for equal timestamps
        replies.sort(key=lambda r: r.created_at)
        return replies

    async def add(self, reply: Reply) -> Reply:
        """Insert a reply.

        Raises:
            IntegrityError: If the ID is taken
        """
        if reply.id in self._replies:
            raise IntegrityError("Duplicate reply", None, Exception())
        self._replies[reply.id] = reply
        return reply

    async def update_body(self, reply_id: ReplyId, body: str) -> Optional[Reply]:
        reply = self._replies.get(reply_id)
        if not reply:
            return None
        updated = reply.model_copy(update={"body": body, "updated_at": datetime.now()})
        self._replies[reply_id] = updated
        return updated

    async def add_to_upvote_count(
        self, reply_id: ReplyId, delta: int
    ) -> Optional[Reply]:
        reply = self._replies.get(reply_id)
        if not reply:
            return None
        updated = reply.model_copy(
            update={"upvote_count": max(0, reply.upvote_count + delta)}
        )
        self._replies[reply_id] = updated
        return updated

    async def delete_subtree(self, reply_id: ReplyId) -> list[ReplyId]:
        if reply_id not in self._replies:
            return []

        doomed: list[ReplyId] = []
        seen: set[ReplyId] = set()
        pending = [reply_id]
        while pending:
            current = pending.pop()
            if current in seen:
                continue
            seen.add(current)
            doomed.append(current)
            pending.extend(
                rid for rid, r in self._replies.items() if r.parent_id == current
            )

        for rid in doomed:
            del self._replies[rid]
        return doomed

    async def delete_by_post(self, post_id: PostId) -> list[ReplyId]:
        deleted = [rid for rid, r in self._replies.items() if r.post_id == post_id]
        for reply_id in deleted:
            del self._replies[reply_id]
        return deleted
