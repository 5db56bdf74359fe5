"""Delete reply use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.domain.service import ReplyService
from discuss.domain.value import ReplyId, Role, UserId


class DeleteReplyRequest(BaseModel):
    """Delete reply request."""

    reply_id: str  # UUID string
    user_id: str  # Acting user ID
    role: Role = Role.USER


class DeleteReplyResponse(BaseModel):
    """Delete reply response."""

    reply_id: str
    removed: int  # Replies removed, including nested ones


class DeleteReplyUseCase:
    """Use case for deleting a reply and everything beneath it."""

    def __init__(self, reply_service: ReplyService) -> None:
        self.reply_service = reply_service

    async def execute(self, request: DeleteReplyRequest) -> DeleteReplyResponse:
        removed = await self.reply_service.delete_reply(
            ReplyId(UUID(request.reply_id)),
            UserId(UUID(request.user_id)),
            request.role,
        )
        return DeleteReplyResponse(reply_id=request.reply_id, removed=removed)
