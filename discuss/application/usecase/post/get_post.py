"""Get post use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from discuss.domain.model import ANONYMOUS_DISPLAY_NAME, DiscussionPost
from discuss.domain.model.user import UserProfileSummary
from discuss.domain.service import PostService, ProfileService, VoteService
from discuss.domain.value import PostId, UserId, VotableType


class PostItem(BaseModel):
    """Post item in response."""

    post_id: str
    forum_id: str
    author_id: str
    author_name: str
    author_avatar_url: str | None
    title: str
    body: str
    pinned: bool
    solved: bool
    closed: bool
    view_count: int
    upvote_count: int
    reply_count: int
    created_at: datetime
    updated_at: datetime
    last_reply_at: datetime | None
    has_voted: bool = False

    @classmethod
    def from_post(
        cls,
        post: DiscussionPost,
        author: UserProfileSummary | None,
        has_voted: bool = False,
    ) -> "PostItem":
        return cls(
            post_id=str(post.id),
            forum_id=str(post.forum_id),
            author_id=str(post.author_id),
            author_name=author.display_name if author else ANONYMOUS_DISPLAY_NAME,
            author_avatar_url=author.avatar_url if author else None,
            title=post.title,
            body=post.body,
            pinned=post.pinned,
            solved=post.solved,
            closed=post.closed,
            view_count=post.view_count,
            upvote_count=post.upvote_count,
            reply_count=post.reply_count,
            created_at=post.created_at,
            updated_at=post.updated_at,
            last_reply_at=post.last_reply_at,
            has_voted=has_voted,
        )


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string
    user_id: str | None = None  # Current user ID (if authenticated)
    count_view: bool = True


class GetPostUseCase:
    """Use case for reading a post; each read counts as a view."""

    def __init__(
        self,
        post_service: PostService,
        profile_service: ProfileService,
        vote_service: VoteService,
    ) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            profile_service: Author profile resolver
            vote_service: Vote service (for the reader's vote state)
        """
        self.post_service = post_service
        self.profile_service = profile_service
        self.vote_service = vote_service

    async def execute(self, request: GetPostRequest) -> PostItem:
        """Execute get post flow.

        Raises:
            NotFoundError: If post not found
        """
        post_id = PostId(UUID(request.post_id))

        if request.count_view:
            post = await self.post_service.increment_view(post_id)
        else:
            post = await self.post_service.get_post(post_id)

        author = await self.profile_service.resolve(post.author_id)

        has_voted = False
        if request.user_id:
            has_voted = await self.vote_service.has_voted(
                UserId(UUID(request.user_id)), post.id, VotableType.POST
            )

        return PostItem.from_post(post, author, has_voted)
