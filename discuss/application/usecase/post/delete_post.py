"""Delete post use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.domain.service import PostService
from discuss.domain.value import PostId, Role, UserId


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str  # UUID string
    user_id: str  # Acting user ID
    role: Role = Role.USER


class DeletePostResponse(BaseModel):
    """Delete post response."""

    post_id: str
    deleted: bool


class DeletePostUseCase:
    """Use case for deleting a post with its replies and votes."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize delete post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Raises:
            NotFoundError: If post not found
            ForbiddenError: If the actor is neither owner nor admin
        """
        await self.post_service.delete_post(
            PostId(UUID(request.post_id)),
            UserId(UUID(request.user_id)),
            request.role,
        )
        return DeletePostResponse(post_id=request.post_id, deleted=True)
