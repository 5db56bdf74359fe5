"""Create post use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.domain.service import PostService, ProfileService
from discuss.domain.value import ForumId, UserId

from .get_post import PostItem


class CreatePostRequest(BaseModel):
    """Create post request."""

    forum_id: str  # UUID string
    title: str
    body: str
    author_id: str  # User ID from authenticated user
    idempotency_key: str | None = None


class CreatePostUseCase:
    """Use case for starting a discussion in a forum."""

    def __init__(
        self, post_service: PostService, profile_service: ProfileService
    ) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            profile_service: Author profile resolver
        """
        self.post_service = post_service
        self.profile_service = profile_service

    async def execute(self, request: CreatePostRequest) -> PostItem:
        """Execute create post flow.

        Raises:
            ValidationFailedError: If title or body is invalid
            NotFoundError: If forum not found
            ForumInactiveError: If forum is inactive
        """
        post = await self.post_service.create_post(
            forum_id=ForumId(UUID(request.forum_id)),
            author_id=UserId(UUID(request.author_id)),
            title=request.title,
            body=request.body,
            idempotency_key=request.idempotency_key,
        )
        author = await self.profile_service.resolve(post.author_id)
        return PostItem.from_post(post, author)
