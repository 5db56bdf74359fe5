"""Create reply use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from discuss.domain.model import ANONYMOUS_DISPLAY_NAME, Reply
from discuss.domain.model.user import UserProfileSummary
from discuss.domain.service import ProfileService, ReplyService
from discuss.domain.value import PostId, ReplyId, UserId


class ReplyItem(BaseModel):
    """Reply item in response."""

    reply_id: str
    post_id: str
    parent_id: str | None
    author_id: str
    author_name: str
    author_avatar_url: str | None
    body: str
    depth: int
    is_helpful: bool
    upvote_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_reply(
        cls, reply: Reply, author: UserProfileSummary | None
    ) -> "ReplyItem":
        return cls(
            reply_id=str(reply.id),
            post_id=str(reply.post_id),
            parent_id=str(reply.parent_id) if reply.parent_id else None,
            author_id=str(reply.author_id),
            author_name=author.display_name if author else ANONYMOUS_DISPLAY_NAME,
            author_avatar_url=author.avatar_url if author else None,
            body=reply.body,
            depth=reply.depth,
            is_helpful=reply.is_helpful,
            upvote_count=reply.upvote_count,
            created_at=reply.created_at,
            updated_at=reply.updated_at,
        )


class CreateReplyRequest(BaseModel):
    """Create reply request."""

    post_id: str  # UUID string
    body: str
    author_id: str  # User ID from authenticated user
    parent_id: str | None = None  # Parent reply ID for nested replies
    idempotency_key: str | None = None


class CreateReplyUseCase:
    """Use case for replying to a post or to another reply."""

    def __init__(
        self, reply_service: ReplyService, profile_service: ProfileService
    ) -> None:
        """Initialize create reply use case.

        Args:
            reply_service: Reply domain service
            profile_service: Author profile resolver
        """
        self.reply_service = reply_service
        self.profile_service = profile_service

    async def execute(self, request: CreateReplyRequest) -> ReplyItem:
        """Execute create reply flow.

        The reply service validates the parent and bumps the post's
        reply counter.

        Raises:
            ValidationFailedError: If body is invalid or parent is foreign
            NotFoundError: If post or parent not found
            PostClosedError: If the post is closed
        """
        parent_id = ReplyId(UUID(request.parent_id)) if request.parent_id else None
        reply = await self.reply_service.create_reply(
            post_id=PostId(UUID(request.post_id)),
            author_id=UserId(UUID(request.author_id)),
            body=request.body,
            parent_id=parent_id,
            idempotency_key=request.idempotency_key,
        )
        author = await self.profile_service.resolve(reply.author_id)
        return ReplyItem.from_reply(reply, author)
