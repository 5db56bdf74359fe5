"""Unit tests for ReplyService."""

from uuid import uuid4

import pytest

from discuss.config import ForumSettings
from discuss.domain.error import (
    ForbiddenError,
    NotFoundError,
    PostClosedError,
    ValidationFailedError,
)
from discuss.domain.model import ANONYMOUS_DISPLAY_NAME
from discuss.domain.repository import (
    ForumRepository,
    PostRepository,
    ReplyRepository,
    UserRepository,
    VoteRepository,
)
from discuss.domain.service import ProfileService, ReplyService, VoteService
from discuss.domain.value import PostId, ReplyId, Role, UserId, VotableType
from tests.conftest import at, make_forum, make_post, make_reply, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


async def _seed_post(env, author_id: UserId | None = None, closed: bool = False):
    forum_repo = await env.get(ForumRepository)
    post_repo = await env.get(PostRepository)
    forum = await forum_repo.save(make_forum())
    return await post_repo.add(
        make_post(forum.id, author_id or UserId(uuid4()), closed=closed)
    )


def _flatten(nodes):
    for node in nodes:
        yield node
        yield from _flatten(node.children)


class TestCreateReply:
    """Tests for create_reply method."""

    @pytest.mark.asyncio
    async def test_top_level_reply_has_depth_zero(self, unit_env):
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed_post(unit_env)

        # Act
        reply = await reply_service.create_reply(
            post.id, UserId(uuid4()), "Vitamin D as well."
        )

        # Assert
        assert reply.depth == 0
        assert reply.parent_id is None
        updated = await post_repo.find_by_id(post.id)
        assert updated.reply_count == 1
        assert updated.last_reply_at == reply.created_at

    @pytest.mark.asyncio
    async def test_nested_reply_increments_depth(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)
        parent = await reply_service.create_reply(post.id, UserId(uuid4()), "R1")

        child = await reply_service.create_reply(
            post.id, UserId(uuid4()), "R2", parent_id=parent.id
        )

        assert child.depth == 1
        assert child.parent_id == parent.id

    @pytest.mark.asyncio
    async def test_closed_post_rejects_replies(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed_post(unit_env, closed=True)

        with pytest.raises(PostClosedError):
            await reply_service.create_reply(post.id, UserId(uuid4()), "Hello")

        assert (await post_repo.find_by_id(post.id)).reply_count == 0

    @pytest.mark.asyncio
    async def test_missing_post(self, unit_env):
        reply_service = await unit_env.get(ReplyService)

        with pytest.raises(NotFoundError):
            await reply_service.create_reply(PostId(uuid4()), UserId(uuid4()), "x")

    @pytest.mark.asyncio
    async def test_missing_parent(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)

        with pytest.raises(NotFoundError, match="Reply"):
            await reply_service.create_reply(
                post.id, UserId(uuid4()), "x", parent_id=ReplyId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_parent_on_other_post_rejected(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post_a = await _seed_post(unit_env)
        post_b = await _seed_post(unit_env)
        foreign = await reply_service.create_reply(post_a.id, UserId(uuid4()), "A")

        with pytest.raises(ValidationFailedError):
            await reply_service.create_reply(
                post_b.id, UserId(uuid4()), "B", parent_id=foreign.id
            )

    @pytest.mark.asyncio
    async def test_blank_body_rejected(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)

        with pytest.raises(ValidationFailedError):
            await reply_service.create_reply(post.id, UserId(uuid4()), "   ")

    @pytest.mark.asyncio
    async def test_replay_counts_once(self, unit_env):
        """Retried create with the same key leaves reply_count at one."""
        reply_service = await unit_env.get(ReplyService)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed_post(unit_env)
        author_id = UserId(uuid4())

        first = await reply_service.create_reply(
            post.id, author_id, "Hi", idempotency_key="retry-me"
        )
        second = await reply_service.create_reply(
            post.id, author_id, "Hi", idempotency_key="retry-me"
        )

        assert first.id == second.id
        assert (await post_repo.find_by_id(post.id)).reply_count == 1

    @pytest.mark.asyncio
    async def test_body_limit_follows_settings(self, unit_env):
        """Raising body_max_length lets longer replies through end to end."""
        reply_service = ReplyService(
            reply_repository=await unit_env.get(ReplyRepository),
            post_repository=await unit_env.get(PostRepository),
            vote_repository=await unit_env.get(VoteRepository),
            profile_service=await unit_env.get(ProfileService),
            forum_settings=ForumSettings(body_max_length=20000),
        )
        post = await _seed_post(unit_env)

        reply = await reply_service.create_reply(post.id, UserId(uuid4()), "a" * 15000)

        assert len(reply.body) == 15000

    @pytest.mark.asyncio
    async def test_key_reused_on_other_post_rejected(self, unit_env):
        """The second reply must not resolve to the first post's reply."""
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        post_repo = await unit_env.get(PostRepository)
        reply_repo = await unit_env.get(ReplyRepository)
        post_a = await _seed_post(unit_env)
        post_b = await _seed_post(unit_env)
        author_id = UserId(uuid4())
        await reply_service.create_reply(
            post_a.id, author_id, "On A", idempotency_key="k"
        )

        # Act / Assert
        with pytest.raises(ValidationFailedError, match="Idempotency key"):
            await reply_service.create_reply(
                post_b.id, author_id, "On B", idempotency_key="k"
            )
        assert await reply_repo.find_by_post(post_b.id) == []
        assert (await post_repo.find_by_id(post_b.id)).reply_count == 0

    @pytest.mark.asyncio
    async def test_key_reused_with_other_body_rejected(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)
        author_id = UserId(uuid4())
        await reply_service.create_reply(post.id, author_id, "Hi", idempotency_key="k")

        with pytest.raises(ValidationFailedError):
            await reply_service.create_reply(
                post.id, author_id, "Something else", idempotency_key="k"
            )

    @pytest.mark.asyncio
    async def test_close_landing_mid_create_rejects_reply(self, unit_env, monkeypatch):
        """A close committed after the post was read still wins."""
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        post_repo = await unit_env.get(PostRepository)
        reply_repo = await unit_env.get(ReplyRepository)
        post = await _seed_post(unit_env)
        await post_repo.set_closed(post.id, True)

        async def read_before_close(post_id):
            return post

        monkeypatch.setattr(post_repo, "find_by_id", read_before_close)

        # Act
        with pytest.raises(PostClosedError):
            await reply_service.create_reply(post.id, UserId(uuid4()), "Too late")

        # Assert
        monkeypatch.undo()
        assert await reply_repo.find_by_post(post.id) == []
        assert (await post_repo.find_by_id(post.id)).reply_count == 0


class TestUpdateReply:
    @pytest.mark.asyncio
    async def test_owner_edits(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)
        author_id = UserId(uuid4())
        reply = await reply_service.create_reply(post.id, author_id, "Old")

        updated = await reply_service.update_reply(
            reply.id, " New ", author_id, Role.USER
        )

        assert updated.body == "New"

    @pytest.mark.asyncio
    async def test_stranger_cannot_edit(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)
        reply = await reply_service.create_reply(post.id, UserId(uuid4()), "Old")

        with pytest.raises(ForbiddenError):
            await reply_service.update_reply(
                reply.id, "New", UserId(uuid4()), Role.USER
            )

    @pytest.mark.asyncio
    async def test_moderator_edits_any(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)
        reply = await reply_service.create_reply(post.id, UserId(uuid4()), "Old")

        updated = await reply_service.update_reply(
            reply.id, "Edited", UserId(uuid4()), Role.AUTHOR
        )

        assert updated.body == "Edited"


class TestDeleteReply:
    @pytest.mark.asyncio
    async def test_delete_removes_subtree_and_votes(self, unit_env):
        # Arrange: R1 -> R2 -> R3, plus a sibling S
        reply_service = await unit_env.get(ReplyService)
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        reply_repo = await unit_env.get(ReplyRepository)
        vote_repo = await unit_env.get(VoteRepository)
        post = await _seed_post(unit_env)
        author_id = UserId(uuid4())
        r1 = await reply_service.create_reply(post.id, author_id, "R1")
        r2 = await reply_service.create_reply(post.id, author_id, "R2", r1.id)
        r3 = await reply_service.create_reply(post.id, author_id, "R3", r2.id)
        sibling = await reply_service.create_reply(post.id, author_id, "S")
        await vote_service.cast_vote(UserId(uuid4()), r3.id, VotableType.REPLY)

        # Act
        removed = await reply_service.delete_reply(r1.id, author_id, Role.USER)

        # Assert
        assert removed == 3
        assert (await post_repo.find_by_id(post.id)).reply_count == 1
        remaining = await reply_repo.find_by_post(post.id)
        assert [r.id for r in remaining] == [sibling.id]
        assert await vote_repo.count_by_votable(VotableType.REPLY, r3.id) == 0

    @pytest.mark.asyncio
    async def test_stranger_cannot_delete(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)
        reply = await reply_service.create_reply(post.id, UserId(uuid4()), "R")

        with pytest.raises(ForbiddenError):
            await reply_service.delete_reply(reply.id, UserId(uuid4()), Role.USER)

    @pytest.mark.asyncio
    async def test_missing_reply(self, unit_env):
        reply_service = await unit_env.get(ReplyService)

        with pytest.raises(NotFoundError):
            await reply_service.delete_reply(
                ReplyId(uuid4()), UserId(uuid4()), Role.ADMIN
            )


class TestLoadTree:
    """Tests for load_tree method."""

    @pytest.mark.asyncio
    async def test_vitamins_thread(self, unit_env):
        """R2 answers R1; both show up nested with author names."""
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        user_repo = await unit_env.get(UserRepository)
        aysel = await user_repo.save(make_user("Aysel"))
        nigar = await user_repo.save(make_user("Nigar"))
        post = await _seed_post(unit_env, author_id=aysel.id)
        r1 = await reply_service.create_reply(post.id, nigar.id, "Vitamin D too")
        r2 = await reply_service.create_reply(
            post.id, aysel.id, "Thanks! How much?", parent_id=r1.id
        )

        # Act
        tree = await reply_service.load_tree(post.id)

        # Assert
        assert len(tree) == 1
        root = tree[0]
        assert root.reply.id == r1.id
        assert root.author_name == "Nigar"
        assert root.depth == 0
        assert [c.reply.id for c in root.children] == [r2.id]
        assert root.children[0].author_name == "Aysel"
        assert root.children[0].depth == 1

    @pytest.mark.asyncio
    async def test_missing_post(self, unit_env):
        reply_service = await unit_env.get(ReplyService)

        with pytest.raises(NotFoundError):
            await reply_service.load_tree(PostId(uuid4()))

    @pytest.mark.asyncio
    async def test_empty_thread(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)

        assert await reply_service.load_tree(post.id) == []

    @pytest.mark.asyncio
    async def test_repeated_loads_give_the_same_tree(self, unit_env):
        """Nodes, edges and sibling order don't change between loads."""
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        post = await _seed_post(unit_env)
        author_id = UserId(uuid4())
        first_root = await reply_repo.add(
            make_reply(post.id, author_id, created_at=at(1))
        )
        await reply_repo.add(make_reply(post.id, author_id, created_at=at(2)))
        await reply_repo.add(
            make_reply(
                post.id, author_id, parent_id=first_root.id, depth=1, created_at=at(3)
            )
        )

        def edges(tree):
            return [
                (node.reply.id, node.reply.parent_id, position, node.depth)
                for position, node in enumerate(_flatten(tree))
            ]

        # Act
        first = await reply_service.load_tree(post.id)
        second = await reply_service.load_tree(post.id)

        # Assert
        assert first == second
        assert edges(first) == edges(second)
        assert len(first) == 2
        assert len(first[0].children) == 1

    @pytest.mark.asyncio
    async def test_siblings_oldest_first(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        post = await _seed_post(unit_env)
        author_id = UserId(uuid4())
        late = await reply_repo.add(make_reply(post.id, author_id, created_at=at(5)))
        early = await reply_repo.add(make_reply(post.id, author_id, created_at=at(1)))

        tree = await reply_service.load_tree(post.id)

        assert [n.reply.id for n in tree] == [early.id, late.id]

    @pytest.mark.asyncio
    async def test_orphan_becomes_root(self, unit_env):
        """A reply whose parent is gone is shown at the top level."""
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        post = await _seed_post(unit_env)
        orphan = await reply_repo.add(
            make_reply(post.id, UserId(uuid4()), parent_id=ReplyId(uuid4()), depth=2)
        )

        tree = await reply_service.load_tree(post.id)

        assert [n.reply.id for n in tree] == [orphan.id]
        assert tree[0].depth == 0

    @pytest.mark.asyncio
    async def test_cycle_is_dropped(self, unit_env):
        """Replies pointing at each other are unreachable and left out."""
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        reply_repo = await unit_env.get(ReplyRepository)
        post = await _seed_post(unit_env)
        author_id = UserId(uuid4())
        a_id, b_id = ReplyId(uuid4()), ReplyId(uuid4())
        await reply_repo.add(
            make_reply(post.id, author_id, parent_id=b_id, reply_id=a_id)
        )
        await reply_repo.add(
            make_reply(post.id, author_id, parent_id=a_id, reply_id=b_id)
        )
        root = await reply_repo.add(make_reply(post.id, author_id, created_at=at(3)))

        # Act
        tree = await reply_service.load_tree(post.id)

        # Assert
        assert [n.reply.id for n in _flatten(tree)] == [root.id]

    @pytest.mark.asyncio
    async def test_can_reply_stops_at_max_depth(self, unit_env):
        """With the default max depth of 3, the third level is read-only."""
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)
        author_id = UserId(uuid4())
        parent_id = None
        for level in range(4):
            reply = await reply_service.create_reply(
                post.id, author_id, f"Level {level}", parent_id=parent_id
            )
            parent_id = reply.id

        nodes = list(_flatten(await reply_service.load_tree(post.id)))

        assert [n.depth for n in nodes] == [0, 1, 2, 3]
        assert [n.can_reply for n in nodes] == [True, True, False, False]

    @pytest.mark.asyncio
    async def test_profiles_resolved_in_one_lookup(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        user_repo = await unit_env.get(UserRepository)
        post = await _seed_post(unit_env)
        authors = [await user_repo.save(make_user(f"User {i}")) for i in range(3)]
        for author in authors:
            await reply_service.create_reply(post.id, author.id, "Me too")
        before = user_repo.lookup_count

        await reply_service.load_tree(post.id)

        assert user_repo.lookup_count == before + 1

    @pytest.mark.asyncio
    async def test_unknown_author_is_anonymous(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _seed_post(unit_env)
        await reply_service.create_reply(post.id, UserId(uuid4()), "Hi")

        tree = await reply_service.load_tree(post.id)

        assert tree[0].author is None
        assert tree[0].author_name == ANONYMOUS_DISPLAY_NAME
