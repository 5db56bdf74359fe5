"""Get forum use case."""

from pydantic import BaseModel

from discuss.domain.error import NotFoundError
from discuss.domain.service import ForumService, PostService
from discuss.domain.value import Slug

from .list_forums import ForumItem


class GetForumRequest(BaseModel):
    """Get forum request."""

    slug: str


class GetForumUseCase:
    """Use case for looking up a forum by slug."""

    def __init__(self, forum_service: ForumService, post_service: PostService) -> None:
        """Initialize get forum use case.

        Args:
            forum_service: Forum catalog service
            post_service: Post service (for the live post count)
        """
        self.forum_service = forum_service
        self.post_service = post_service

    async def execute(self, request: GetForumRequest) -> ForumItem:
        """Execute get forum flow.

        Raises:
            NotFoundError: If no forum has this slug
        """
        try:
            slug = Slug(request.slug)
        except ValueError:
            raise NotFoundError("Forum", request.slug)

        forum = await self.forum_service.get_forum_by_slug(slug)
        post_count = await self.post_service.count_posts(forum.id)
        return ForumItem.from_forum(forum, post_count)
