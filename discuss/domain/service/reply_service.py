"""Reply domain service: writing replies and assembling reply trees."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from discuss.config import ForumSettings
from discuss.domain.error import (
    ForbiddenError,
    NotFoundError,
    PostClosedError,
    ValidationFailedError,
)
from discuss.domain.model.reply import Reply
from discuss.domain.model.user import ANONYMOUS_DISPLAY_NAME, UserProfileSummary
from discuss.domain.repository import PostRepository, ReplyRepository, VoteRepository
from discuss.domain.value import (
    PostId,
    ReplyId,
    Role,
    UserId,
    VotableType,
    derive_id,
)

from . import moderation
from .base import Service
from .profile_service import ProfileService
from .validation import require_text


@dataclass
class ReplyNode:
    """Reply positioned in the rendered tree of a post.

    depth is the position in the rendered tree (0 for roots), which can
    differ from the depth stored on the reply when its parent is missing.
    """

    reply: Reply
    author: UserProfileSummary | None
    depth: int
    can_reply: bool
    children: list["ReplyNode"] = field(default_factory=list)

    @property
    def author_name(self) -> str:
        return self.author.display_name if self.author else ANONYMOUS_DISPLAY_NAME


class ReplyService(Service):
    """Domain service for reply operations."""

    def __init__(
        self,
        reply_repository: ReplyRepository,
        post_repository: PostRepository,
        vote_repository: VoteRepository,
        profile_service: ProfileService,
        forum_settings: ForumSettings,
    ) -> None:
        """Initialize reply service.

        Args:
            reply_repository: Reply repository
            post_repository: Post repository
            vote_repository: Vote repository (votes on deleted replies go too)
            profile_service: Author profile resolver
            forum_settings: Discussion rules
        """
        self.reply_repository = reply_repository
        self.post_repository = post_repository
        self.vote_repository = vote_repository
        self.profile_service = profile_service
        self.forum_settings = forum_settings

    async def create_reply(
        self,
        post_id: PostId,
        author_id: UserId,
        body: str,
        parent_id: ReplyId | None = None,
        idempotency_key: str | None = None,
    ) -> Reply:
        """Reply to a post or to another reply of the same post.

        Args:
            post_id: Post ID
            author_id: Author user ID
            body: Reply text
            parent_id: Parent reply ID (None for a top-level reply)
            idempotency_key: Optional client key; repeating a create with
                the same key returns the first reply and leaves counters alone

        Returns:
            Created reply

        Raises:
            ValidationFailedError: If body is invalid or the parent belongs
                to another post, or the idempotency key was used for a
                different reply
            NotFoundError: If post or parent reply not found
            PostClosedError: If the post is closed, including a close that
                lands while the reply is being written
        """
        with logfire.span(
            "reply_service.create_reply",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            body = require_text("Body", body, self.forum_settings.body_max_length)

            post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Reply to non-existent post", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))
            if post.closed:
                logfire.warn("Reply to closed post", post_id=str(post_id))
                raise PostClosedError(str(post_id))

            depth = 0
            if parent_id:
                parent = await self.reply_repository.find_by_id(parent_id)
                if not parent:
                    logfire.error(
                        "Parent reply not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise NotFoundError("Reply", str(parent_id))
                if parent.post_id != post_id:
                    logfire.error(
                        "Parent reply does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValidationFailedError(
                        "Parent reply does not belong to this post"
                    )
                depth = parent.depth + 1

            if idempotency_key:
                reply_id = ReplyId(derive_id("reply", author_id, idempotency_key))
            else:
                reply_id = ReplyId(uuid4())

            now = datetime.now()
            reply = Reply(
                id=reply_id,
                post_id=post_id,
                author_id=author_id,
                parent_id=parent_id,
                depth=depth,
                body=body,
                created_at=now,
                updated_at=now,
            )

            try:
                saved = await self.reply_repository.add(reply)
            except IntegrityError:
                existing = await self.reply_repository.find_by_id(reply_id)
                if not (idempotency_key and existing):
                    raise
                if (existing.post_id, existing.parent_id, existing.body) != (
                    post_id,
                    parent_id,
                    body,
                ):
                    logfire.warn(
                        "Idempotency key reused for a different reply",
                        reply_id=str(reply_id),
                        post_id=str(post_id),
                    )
                    raise ValidationFailedError(
                        "Idempotency key reused for a different request"
                    )
                logfire.info("Replayed reply creation", reply_id=str(reply_id))
                return existing

            updated = await self.post_repository.add_to_reply_count(
                post_id, 1, last_reply_at=now, only_if_open=True
            )
            if updated is None:
                # Closed (or deleted) since it was read above
                await self.reply_repository.delete_subtree(saved.id)
                logfire.warn("Post closed while replying", post_id=str(post_id))
                raise PostClosedError(str(post_id))

            logfire.info(
                "Reply created",
                reply_id=str(saved.id),
                post_id=str(post_id),
                depth=depth,
            )
            return saved

    async def get_reply(self, reply_id: ReplyId) -> Reply:
        """Get a reply by ID.

        Raises:
            NotFoundError: If reply not found
        """
        reply = await self.reply_repository.find_by_id(reply_id)
        if not reply:
            logfire.warn("Reply not found", reply_id=str(reply_id))
            raise NotFoundError("Reply", str(reply_id))
        return reply

    async def update_reply(
        self,
        reply_id: ReplyId,
        new_body: str,
        acting_user_id: UserId,
        acting_role: Role,
    ) -> Reply:
        """Edit the text of a reply.

        Raises:
            ValidationFailedError: If the new body is invalid
            NotFoundError: If reply not found
            ForbiddenError: If the actor may not edit this reply
        """
        with logfire.span(
            "reply_service.update_reply",
            reply_id=str(reply_id),
            acting_user_id=str(acting_user_id),
        ):
            body = require_text("Body", new_body, self.forum_settings.body_max_length)

            reply = await self.get_reply(reply_id)
            if not moderation.can_edit_or_delete(
                reply.author_id, acting_user_id, acting_role
            ):
                logfire.warn(
                    "Reply edit rejected",
                    reply_id=str(reply_id),
                    acting_user_id=str(acting_user_id),
                )
                raise ForbiddenError("edit", "reply", str(reply_id), str(acting_user_id))

            updated = await self.reply_repository.update_body(reply_id, body)
            if not updated:
                raise NotFoundError("Reply", str(reply_id))
            logfire.info("Reply updated", reply_id=str(reply_id))
            return updated

    async def delete_reply(
        self, reply_id: ReplyId, acting_user_id: UserId, acting_role: Role
    ) -> int:
        """Delete a reply together with every reply beneath it.

        Votes on the removed replies are deleted and the post's reply_count
        is decremented by the number of removed replies.

        Returns:
            Number of replies removed

        Raises:
            NotFoundError: If reply not found
            ForbiddenError: If the actor may not delete this reply
        """
        with logfire.span(
            "reply_service.delete_reply",
            reply_id=str(reply_id),
            acting_user_id=str(acting_user_id),
        ):
            reply = await self.get_reply(reply_id)
            if not moderation.can_edit_or_delete(
                reply.author_id, acting_user_id, acting_role
            ):
                logfire.warn(
                    "Reply delete rejected",
                    reply_id=str(reply_id),
                    acting_user_id=str(acting_user_id),
                )
                raise ForbiddenError(
                    "delete", "reply", str(reply_id), str(acting_user_id)
                )

            subtree = await self.reply_repository.delete_subtree(reply.id)
            removed = len(subtree)
            await self.vote_repository.delete_by_votables(VotableType.REPLY, subtree)
            if removed:
                await self.post_repository.add_to_reply_count(reply.post_id, -removed)

            logfire.info(
                "Reply deleted",
                reply_id=str(reply_id),
                post_id=str(reply.post_id),
                removed=removed,
            )
            return removed

    async def load_tree(self, post_id: PostId) -> list[ReplyNode]:
        """Assemble the reply tree of a post.

        Algorithm:
        1. Fetch all replies of the post as a flat list
        2. Index them by ID and group children under their parent
        3. Roots are replies without a parent or whose parent is gone
        4. Resolve every distinct author in one batched lookup
        5. Walk down from the roots iteratively, visiting each reply once

        Replies caught in a parent-pointer cycle are unreachable from any
        root and are left out. Siblings are ordered oldest first.

        Args:
            post_id: Post ID

        Returns:
            Root nodes with children populated

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span("reply_service.load_tree", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                raise NotFoundError("Post", str(post_id))

            replies = sorted(
                await self.reply_repository.find_by_post(post_id),
                key=lambda r: r.created_at,
            )
            by_id = {reply.id: reply for reply in replies}
            children = _children_index(replies)
            roots = [
                reply
                for reply in replies
                if reply.parent_id is None or reply.parent_id not in by_id
            ]

            profiles = await self.profile_service.resolve_many(
                reply.author_id for reply in replies
            )

            max_depth = self.forum_settings.max_reply_depth

            def make_node(reply: Reply, depth: int) -> ReplyNode:
                return ReplyNode(
                    reply=reply,
                    author=profiles.get(reply.author_id),
                    depth=depth,
                    can_reply=depth + 1 < max_depth,
                )

            visited: set[ReplyId] = set()
            tree_roots: list[ReplyNode] = []
            stack: list[ReplyNode] = []
            for root in roots:
                visited.add(root.id)
                node = make_node(root, 0)
                tree_roots.append(node)
                stack.append(node)

            while stack:
                node = stack.pop()
                for child in children.get(node.reply.id, []):
                    if child.id in visited:
                        continue
                    visited.add(child.id)
                    child_node = make_node(child, node.depth + 1)
                    node.children.append(child_node)
                    stack.append(child_node)

            dropped = len(replies) - len(visited)
            if dropped:
                logfire.warn(
                    "Replies unreachable from any root were skipped",
                    post_id=str(post_id),
                    dropped=dropped,
                )

            logfire.info(
                "Reply tree built",
                post_id=str(post_id),
                replies=len(visited),
                roots=len(tree_roots),
            )
            return tree_roots


def _children_index(replies: list[Reply]) -> dict[ReplyId, list[Reply]]:
    """Group replies under their parent ID, keeping input order."""
    index: dict[ReplyId, list[Reply]] = defaultdict(list)
    for reply in replies:
        if reply.parent_id is not None:
            index[reply.parent_id].append(reply)
    return index
