"""Change post state use case (pin, solve, close and their inverses)."""

from enum import Enum
from uuid import UUID

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.service import PostService, ProfileService
from discuss.domain.value import PostId, Role, UserId

from .get_post import PostItem


class PostAction(str, Enum):
    """Lifecycle transition requested on a post."""

    PIN = "pin"
    UNPIN = "unpin"
    SOLVE = "solve"
    UNSOLVE = "unsolve"
    CLOSE = "close"
    REOPEN = "reopen"


class ChangePostStateRequest(BaseModel):
    """Change post state request."""

    post_id: str  # UUID string
    action: PostAction
    user_id: str  # Acting user ID
    role: Role = Role.USER  # Acting user role


class ChangePostStateUseCase(BaseUseCase):
    """Use case for lifecycle transitions on a post."""

    def __init__(
        self, post_service: PostService, profile_service: ProfileService
    ) -> None:
        """Initialize change post state use case.

        Args:
            post_service: Post domain service
            profile_service: Author profile resolver
        """
        self.post_service = post_service
        self.profile_service = profile_service

    async def execute(self, request: ChangePostStateRequest) -> PostItem:
        """Apply the requested transition.

        Raises:
            NotFoundError: If post not found
            ForbiddenError: If the actor may not perform the transition
            AlreadyClosedError: On close of a closed post
            NotClosedError: On reopen of an open post
        """
        post_id = PostId(UUID(request.post_id))
        user_id = UserId(UUID(request.user_id))

        if request.action == PostAction.PIN:
            post = await self.post_service.pin(post_id, user_id, request.role)
        elif request.action == PostAction.UNPIN:
            post = await self.post_service.unpin(post_id, user_id, request.role)
        elif request.action == PostAction.SOLVE:
            post = await self.post_service.mark_solved(post_id)
        elif request.action == PostAction.UNSOLVE:
            post = await self.post_service.unmark_solved(
                post_id, user_id, request.role
            )
        elif request.action == PostAction.CLOSE:
            post = await self.post_service.close(post_id, user_id)
        else:  # PostAction.REOPEN
            post = await self.post_service.reopen(post_id, user_id, request.role)

        author = await self.profile_service.resolve(post.author_id)
        return PostItem.from_post(post, author)
