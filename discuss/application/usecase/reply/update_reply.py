"""Update reply use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.domain.service import ProfileService, ReplyService
from discuss.domain.value import ReplyId, Role, UserId

from .create_reply import ReplyItem


class UpdateReplyRequest(BaseModel):
    """Update reply request."""

    reply_id: str  # UUID string
    body: str
    user_id: str  # Acting user ID
    role: Role = Role.USER


class UpdateReplyUseCase:
    """Use case for editing a reply's text."""

    def __init__(
        self, reply_service: ReplyService, profile_service: ProfileService
    ) -> None:
        """Initialize update reply use case.

        Args:
            reply_service: Reply domain service
            profile_service: Author profile resolver
        """
        self.reply_service = reply_service
        self.profile_service = profile_service

    async def execute(self, request: UpdateReplyRequest) -> ReplyItem:
        """Execute update reply flow.

        Raises:
            ValidationFailedError: If body is invalid
            NotFoundError: If reply not found
            ForbiddenError: If the actor is neither owner nor moderator
        """
        reply = await self.reply_service.update_reply(
            ReplyId(UUID(request.reply_id)),
            request.body,
            UserId(UUID(request.user_id)),
            request.role,
        )
        author = await self.profile_service.resolve(reply.author_id)
        return ReplyItem.from_reply(reply, author)
