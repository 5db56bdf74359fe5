"""Forum catalog service."""

from dataclasses import dataclass

import logfire

from discuss.domain.error import NotFoundError
from discuss.domain.model.forum import Forum
from discuss.domain.repository import ForumRepository, PostRepository
from discuss.domain.value import ForumId, Slug

from .base import Service


@dataclass
class ForumListing:
    """Forum together with its live post count."""

    forum: Forum
    post_count: int


class ForumService(Service):
    """Read-only access to the forum catalog."""

    def __init__(
        self,
        forum_repository: ForumRepository,
        post_repository: PostRepository,
    ) -> None:
        """Initialize forum service.

        Args:
            forum_repository: Forum repository
            post_repository: Post repository (for live post counts)
        """
        self.forum_repository = forum_repository
        self.post_repository = post_repository

    async def list_forums(self, active_only: bool = True) -> list[ForumListing]:
        """List forums in display order with live post counts.

        Args:
            active_only: Whether to skip inactive forums

        Returns:
            Forums ordered by display order, then creation time
        """
        with logfire.span("forum_service.list_forums", active_only=active_only):
            forums = await self.forum_repository.find_all(active_only=active_only)
            listings = [
                ForumListing(
                    forum=forum,
                    post_count=await self.post_repository.count_by_forum(forum.id),
                )
                for forum in forums
            ]
            logfire.info("Forums listed", count=len(listings))
            return listings

    async def get_forum(self, forum_id: ForumId) -> Forum:
        """Get a forum by ID.

        Raises:
            NotFoundError: If forum not found
        """
        with logfire.span("forum_service.get_forum", forum_id=str(forum_id)):
            forum = await self.forum_repository.find_by_id(forum_id)
            if not forum:
                logfire.warn("Forum not found", forum_id=str(forum_id))
                raise NotFoundError("Forum", str(forum_id))
            return forum

    async def get_forum_by_slug(self, slug: Slug) -> Forum:
        """Get a forum by slug.

        Raises:
            NotFoundError: If forum not found
        """
        with logfire.span("forum_service.get_forum_by_slug", slug=slug.root):
            forum = await self.forum_repository.find_by_slug(slug)
            if not forum:
                logfire.warn("Forum not found by slug", slug=slug.root)
                raise NotFoundError("Forum", slug.root)
            return forum
