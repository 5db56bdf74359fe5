"""List forums use case."""

from datetime import datetime

from pydantic import BaseModel

from discuss.domain.model import Forum
from discuss.domain.service import ForumService
from discuss.domain.value import LocalizedText


class ForumItem(BaseModel):
    """Forum item in response."""

    forum_id: str
    slug: str
    name: LocalizedText
    description: LocalizedText | None
    icon: str | None
    color: str | None
    is_active: bool
    order: int
    post_count: int
    created_at: datetime

    @classmethod
    def from_forum(cls, forum: Forum, post_count: int) -> "ForumItem":
        return cls(
            forum_id=str(forum.id),
            slug=forum.slug.root,
            name=forum.name,
            description=forum.description,
            icon=forum.icon,
            color=forum.color,
            is_active=forum.is_active,
            order=forum.order,
            post_count=post_count,
            created_at=forum.created_at,
        )


class ListForumsRequest(BaseModel):
    """List forums request."""

    active_only: bool = True


class ListForumsResponse(BaseModel):
    """List forums response."""

    forums: list[ForumItem]
    total: int


class ListForumsUseCase:
    """Use case for listing the forum catalog."""

    def __init__(self, forum_service: ForumService) -> None:
        """Initialize list forums use case.

        Args:
            forum_service: Forum catalog service
        """
        self.forum_service = forum_service

    async def execute(self, request: ListForumsRequest) -> ListForumsResponse:
        """List forums in display order with live post counts."""
        listings = await self.forum_service.list_forums(
            active_only=request.active_only
        )
        items = [
            ForumItem.from_forum(listing.forum, listing.post_count)
            for listing in listings
        ]
        return ListForumsResponse(forums=items, total=len(items))
