"""List forum posts use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from discuss.application.usecase.forum.list_forums import ForumItem
from discuss.domain.error import NotFoundError
from discuss.domain.service import (
    ForumService,
    PostService,
    ProfileService,
    VoteService,
)
from discuss.domain.value import Slug, UserId, VotableType

from .get_post import PostItem


class ListPostsRequest(BaseModel):
    """List posts request."""

    slug: str  # Forum slug
    limit: int | None = Field(default=None, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    user_id: str | None = None  # Current user ID (if authenticated)


class ListPostsResponse(BaseModel):
    """List posts response."""

    forum: ForumItem
    posts: list[PostItem]
    total: int


class ListPostsUseCase:
    """Use case for one page of a forum's posts, pinned posts first."""

    def __init__(
        self,
        forum_service: ForumService,
        post_service: PostService,
        profile_service: ProfileService,
        vote_service: VoteService,
    ) -> None:
        """Initialize list posts use case.

        Args:
            forum_service: Forum catalog service
            post_service: Post domain service
            profile_service: Author profile resolver
            vote_service: Vote service (for the reader's vote state)
        """
        self.forum_service = forum_service
        self.post_service = post_service
        self.profile_service = profile_service
        self.vote_service = vote_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Authors of the whole page are resolved in one batched lookup.

        Raises:
            NotFoundError: If forum not found
        """
        try:
            slug = Slug(request.slug)
        except ValueError:
            raise NotFoundError("Forum", request.slug)

        forum = await self.forum_service.get_forum_by_slug(slug)
        posts = await self.post_service.list_posts(
            forum.id, limit=request.limit, offset=request.offset
        )
        total = await self.post_service.count_posts(forum.id)

        authors = await self.profile_service.resolve_many(p.author_id for p in posts)

        voted: dict = {}
        if request.user_id and posts:
            voted = await self.vote_service.has_voted_many(
                UserId(UUID(request.user_id)),
                [post.id for post in posts],
                VotableType.POST,
            )

        items = [
            PostItem.from_post(
                post, authors.get(post.author_id), voted.get(post.id, False)
            )
            for post in posts
        ]
        return ListPostsResponse(
            forum=ForumItem.from_forum(forum, total),
            posts=items,
            total=total,
        )
