"""Post lifecycle service."""

from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from discuss.config import ForumSettings
from discuss.domain.error import (
    AlreadyClosedError,
    ForbiddenError,
    ForumInactiveError,
    NotClosedError,
    NotFoundError,
    ValidationFailedError,
)
from discuss.domain.model.post import DiscussionPost
from discuss.domain.repository import (
    ForumRepository,
    PostRepository,
    ReplyRepository,
    VoteRepository,
)
from discuss.domain.value import (
    ForumId,
    PostId,
    Role,
    UserId,
    VotableType,
    derive_id,
)

from . import moderation
from .base import Service
from .validation import require_text


class PostService(Service):
    """Domain service for discussion posts and their lifecycle flags.

    pinned and solved are independent toggles. closed moves a post from
    Open to Closed, and only an explicit reopen moves it back.
    """

    def __init__(
        self,
        post_repository: PostRepository,
        forum_repository: ForumRepository,
        reply_repository: ReplyRepository,
        vote_repository: VoteRepository,
        forum_settings: ForumSettings,
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            forum_repository: Forum repository
            reply_repository: Reply repository (for cascading deletes)
            vote_repository: Vote repository (for cascading deletes)
            forum_settings: Discussion rules
        """
        self.post_repository = post_repository
        self.forum_repository = forum_repository
        self.reply_repository = reply_repository
        self.vote_repository = vote_repository
        self.forum_settings = forum_settings

    async def create_post(
        self,
        forum_id: ForumId,
        author_id: UserId,
        title: str,
        body: str,
        idempotency_key: str | None = None,
    ) -> DiscussionPost:
        """Create a post in an active forum.

        Args:
            forum_id: Target forum ID
            author_id: Author user ID
            title: Post title
            body: Post body
            idempotency_key: Optional client key; repeating a create with
                the same key returns the post created the first time

        Returns:
            Created post (or the previously created one on replay)

        Raises:
            ValidationFailedError: If title or body is blank or too long, or
                the idempotency key was used for a different post
            NotFoundError: If forum not found
            ForumInactiveError: If forum is inactive
        """
        with logfire.span(
            "post_service.create_post",
            forum_id=str(forum_id),
            author_id=str(author_id),
            idempotent=idempotency_key is not None,
        ):
            title = require_text("Title", title, self.forum_settings.title_max_length)
            body = require_text("Body", body, self.forum_settings.body_max_length)

            forum = await self.forum_repository.find_by_id(forum_id)
            if not forum:
                logfire.warn("Post to non-existent forum", forum_id=str(forum_id))
                raise NotFoundError("Forum", str(forum_id))
            if not forum.is_active:
                logfire.warn("Post to inactive forum", forum_id=str(forum_id))
                raise ForumInactiveError(str(forum_id))

            if idempotency_key:
                post_id = PostId(derive_id("post", author_id, idempotency_key))
            else:
                post_id = PostId(uuid4())

            now = datetime.now()
            post = DiscussionPost(
                id=post_id,
                forum_id=forum_id,
                author_id=author_id,
                title=title,
                body=body,
                created_at=now,
                updated_at=now,
            )

            try:
                saved = await self.post_repository.add(post)
            except IntegrityError:
                existing = await self.post_repository.find_by_id(post_id)
                if not (idempotency_key and existing):
                    raise
                if (existing.forum_id, existing.title, existing.body) != (
                    forum_id,
                    title,
                    body,
                ):
                    logfire.warn(
                        "Idempotency key reused for a different post",
                        post_id=str(post_id),
                        forum_id=str(forum_id),
                    )
                    raise ValidationFailedError(
                        "Idempotency key reused for a different request"
                    )
                logfire.info("Replayed post creation", post_id=str(post_id))
                return existing

            logfire.info(
                "Post created",
                post_id=str(saved.id),
                forum_id=str(forum_id),
                author_id=str(author_id),
            )
            return saved

    async def get_post(self, post_id: PostId) -> DiscussionPost:
        """Get a post by ID.

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span("post_service.get_post", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Post not found", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))
            return post

    async def list_posts(
        self, forum_id: ForumId, limit: int | None = None, offset: int = 0
    ) -> list[DiscussionPost]:
        """List posts of a forum, pinned first, then newest first.

        Args:
            forum_id: Forum ID
            limit: Page size (defaults to the configured page size)
            offset: Number of posts to skip

        Returns:
            Page of posts
        """
        limit = limit or self.forum_settings.default_page_size
        with logfire.span(
            "post_service.list_posts", forum_id=str(forum_id), limit=limit, offset=offset
        ):
            posts = await self.post_repository.find_by_forum(
                forum_id, limit=limit, offset=offset
            )
            logfire.info("Posts listed", forum_id=str(forum_id), count=len(posts))
            return posts

    async def count_posts(self, forum_id: ForumId) -> int:
        return await self.post_repository.count_by_forum(forum_id)

    async def increment_view(self, post_id: PostId) -> DiscussionPost:
        """Record one view of a post.

        Uses SQL-level increment so concurrent views are never lost.

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span("post_service.increment_view", post_id=str(post_id)):
            updated = await self.post_repository.increment_view_count(post_id)
            if not updated:
                raise NotFoundError("Post", str(post_id))
            return updated

    async def pin(
        self, post_id: PostId, acting_user_id: UserId, acting_role: Role
    ) -> DiscussionPost:
        """Pin a post to the top of its forum (admin only).

        Raises:
            NotFoundError: If post not found
            ForbiddenError: If the actor is not an admin
        """
        return await self._set_pinned(post_id, acting_user_id, acting_role, True)

    async def unpin(
        self, post_id: PostId, acting_user_id: UserId, acting_role: Role
    ) -> DiscussionPost:
        """Unpin a post (admin only).

        Raises:
            NotFoundError: If post not found
            ForbiddenError: If the actor is not an admin
        """
        return await self._set_pinned(post_id, acting_user_id, acting_role, False)

    async def _set_pinned(
        self, post_id: PostId, acting_user_id: UserId, acting_role: Role, pinned: bool
    ) -> DiscussionPost:
        action = "pin" if pinned else "unpin"
        with logfire.span(
            f"post_service.{action}",
            post_id=str(post_id),
            acting_user_id=str(acting_user_id),
            acting_role=acting_role.value,
        ):
            await self.get_post(post_id)
            if not moderation.can_pin(acting_role):
                logfire.warn(
                    "Pin change rejected",
                    post_id=str(post_id),
                    acting_user_id=str(acting_user_id),
                )
                raise ForbiddenError(action, "post", str(post_id), str(acting_user_id))

            updated = await self.post_repository.update_flags(post_id, pinned=pinned)
            if not updated:
                raise NotFoundError("Post", str(post_id))
            logfire.info("Post pin changed", post_id=str(post_id), pinned=pinned)
            return updated

    async def mark_solved(self, post_id: PostId) -> DiscussionPost:
        """Mark a post as solved.

        Open to any authenticated user who can read the post.

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span("post_service.mark_solved", post_id=str(post_id)):
            updated = await self.post_repository.update_flags(post_id, solved=True)
            if not updated:
                logfire.warn("Post not found", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))
            logfire.info("Post marked solved", post_id=str(post_id))
            return updated

    async def unmark_solved(
        self, post_id: PostId, acting_user_id: UserId, acting_role: Role
    ) -> DiscussionPost:
        """Clear the solved flag (admins and authors).

        Raises:
            NotFoundError: If post not found
            ForbiddenError: If the actor is not a moderator
        """
        with logfire.span(
            "post_service.unmark_solved",
            post_id=str(post_id),
            acting_role=acting_role.value,
        ):
            await self.get_post(post_id)
            if not moderation.can_unmark_solved(acting_role):
                raise ForbiddenError(
                    "unmark solved", "post", str(post_id), str(acting_user_id)
                )

            updated = await self.post_repository.update_flags(post_id, solved=False)
            if not updated:
                raise NotFoundError("Post", str(post_id))
            logfire.info("Post unmarked solved", post_id=str(post_id))
            return updated

    async def close(self, post_id: PostId, acting_user_id: UserId) -> DiscussionPost:
        """Close a post to new replies (owner only).

        The storage write is conditional on the post being open, so of
        several concurrent closes exactly one succeeds.

        Args:
            post_id: Post ID
            acting_user_id: Acting user ID

        Returns:
            Closed post

        Raises:
            NotFoundError: If post not found
            ForbiddenError: If the actor doesn't own the post
            AlreadyClosedError: If the post is already closed
        """
        with logfire.span(
            "post_service.close",
            post_id=str(post_id),
            acting_user_id=str(acting_user_id),
        ):
            post = await self.get_post(post_id)
            if not moderation.can_close(post.author_id, acting_user_id):
                logfire.warn(
                    "Close rejected, not owner",
                    post_id=str(post_id),
                    acting_user_id=str(acting_user_id),
                )
                raise ForbiddenError("close", "post", str(post_id), str(acting_user_id))
            if post.closed:
                raise AlreadyClosedError(str(post_id))

            updated = await self.post_repository.set_closed(post_id, True)
            if not updated:
                # Lost the race to another close, or the post was deleted
                await self.get_post(post_id)
                raise AlreadyClosedError(str(post_id))

            logfire.info("Post closed", post_id=str(post_id))
            return updated

    async def reopen(
        self, post_id: PostId, acting_user_id: UserId, acting_role: Role
    ) -> DiscussionPost:
        """Reopen a closed post (owner or admin).

        Raises:
            NotFoundError: If post not found
            ForbiddenError: If the actor is neither owner nor admin
            NotClosedError: If the post is open
        """
        with logfire.span(
            "post_service.reopen",
            post_id=str(post_id),
            acting_user_id=str(acting_user_id),
            acting_role=acting_role.value,
        ):
            post = await self.get_post(post_id)
            if not moderation.can_reopen(post.author_id, acting_user_id, acting_role):
                raise ForbiddenError(
                    "reopen", "post", str(post_id), str(acting_user_id)
                )
            if not post.closed:
                raise NotClosedError(str(post_id))

            updated = await self.post_repository.set_closed(post_id, False)
            if not updated:
                await self.get_post(post_id)
                raise NotClosedError(str(post_id))

            logfire.info("Post reopened", post_id=str(post_id))
            return updated

    async def delete_post(
        self, post_id: PostId, acting_user_id: UserId, acting_role: Role
    ) -> None:
        """Delete a post with its replies and all votes on them.

        Raises:
            NotFoundError: If post not found
            ForbiddenError: If the actor is neither owner nor admin
        """
        with logfire.span(
            "post_service.delete_post",
            post_id=str(post_id),
            acting_user_id=str(acting_user_id),
        ):
            post = await self.get_post(post_id)
            if not moderation.can_delete_post(
                post.author_id, acting_user_id, acting_role
            ):
                raise ForbiddenError(
                    "delete", "post", str(post_id), str(acting_user_id)
                )

            reply_ids = await self.reply_repository.delete_by_post(post_id)
            removed_votes = await self.vote_repository.delete_by_votables(
                VotableType.REPLY, reply_ids
            )
            removed_votes += await self.vote_repository.delete_by_votables(
                VotableType.POST, [post_id]
            )
            await self.post_repository.delete(post_id)

            logfire.info(
                "Post deleted",
                post_id=str(post_id),
                replies_removed=len(reply_ids),
                votes_removed=removed_votes,
            )
