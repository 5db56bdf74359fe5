"""Integration tests for the PostgreSQL repositories.

These tests need a migrated PostgreSQL database reachable through
DATABASE__URL. Run them with ``pytest -m integration``.
"""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from discuss.domain.repository import (
    ForumRepository,
    PostRepository,
    ReplyRepository,
    UserRepository,
    VoteRepository,
)
from discuss.domain.model import Vote
from discuss.domain.value import Slug, UserId, VotableType, VoteId
from tests.conftest import at, make_forum, make_post, make_reply, make_user
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})


def _unique_slug() -> str:
    return f"forum-{uuid4().hex[:12]}"


class TestForumAndPostRepositories:
    @pytest.mark.asyncio
    async def test_slug_lookup_and_listing_order(self, integration_env):
        # Arrange
        forum_repo = await integration_env.get(ForumRepository)
        post_repo = await integration_env.get(PostRepository)
        slug = _unique_slug()
        forum = await forum_repo.save(make_forum(slug, "Vitamins"))
        author_id = UserId(uuid4())
        old = await post_repo.add(make_post(forum.id, author_id, created_at=at(0)))
        pinned = await post_repo.add(
            make_post(forum.id, author_id, pinned=True, created_at=at(-5))
        )
        new = await post_repo.add(make_post(forum.id, author_id, created_at=at(5)))

        # Act
        found = await forum_repo.find_by_slug(Slug(slug))
        posts = await post_repo.find_by_forum(forum.id)

        # Assert
        assert found is not None and found.id == forum.id
        assert [p.id for p in posts] == [pinned.id, new.id, old.id]
        assert await post_repo.count_by_forum(forum.id) == 3

    @pytest.mark.asyncio
    async def test_counters_never_go_negative(self, integration_env):
        forum_repo = await integration_env.get(ForumRepository)
        post_repo = await integration_env.get(PostRepository)
        forum = await forum_repo.save(make_forum(_unique_slug()))
        post = await post_repo.add(make_post(forum.id, UserId(uuid4())))

        updated = await post_repo.add_to_upvote_count(post.id, -1)

        assert updated.upvote_count == 0

    @pytest.mark.asyncio
    async def test_set_closed_is_conditional(self, integration_env):
        forum_repo = await integration_env.get(ForumRepository)
        post_repo = await integration_env.get(PostRepository)
        forum = await forum_repo.save(make_forum(_unique_slug()))
        post = await post_repo.add(make_post(forum.id, UserId(uuid4())))

        first = await post_repo.set_closed(post.id, True)
        second = await post_repo.set_closed(post.id, True)

        assert first is not None and first.closed is True
        assert second is None

    @pytest.mark.asyncio
    async def test_reply_count_only_if_open_skips_closed_post(self, integration_env):
        forum_repo = await integration_env.get(ForumRepository)
        post_repo = await integration_env.get(PostRepository)
        forum = await forum_repo.save(make_forum(_unique_slug()))
        post = await post_repo.add(make_post(forum.id, UserId(uuid4())))

        opened = await post_repo.add_to_reply_count(post.id, 1, only_if_open=True)
        await post_repo.set_closed(post.id, True)
        closed = await post_repo.add_to_reply_count(post.id, 1, only_if_open=True)

        assert opened is not None and opened.reply_count == 1
        assert closed is None
        assert (await post_repo.find_by_id(post.id)).reply_count == 1


class TestReplyAndVoteRepositories:
    @pytest.mark.asyncio
    async def test_delete_subtree_returns_every_removed_row(self, integration_env):
        # Arrange
        forum_repo = await integration_env.get(ForumRepository)
        post_repo = await integration_env.get(PostRepository)
        reply_repo = await integration_env.get(ReplyRepository)
        forum = await forum_repo.save(make_forum(_unique_slug()))
        author_id = UserId(uuid4())
        post = await post_repo.add(make_post(forum.id, author_id))
        parent = await reply_repo.add(make_reply(post.id, author_id, created_at=at(0)))
        child = await reply_repo.add(
            make_reply(
                post.id, author_id, parent_id=parent.id, depth=1, created_at=at(1)
            )
        )
        grandchild = await reply_repo.add(
            make_reply(
                post.id, author_id, parent_id=child.id, depth=2, created_at=at(2)
            )
        )
        sibling = await reply_repo.add(
            make_reply(post.id, author_id, created_at=at(3))
        )

        # Act
        removed = await reply_repo.delete_subtree(parent.id)

        # Assert
        assert set(removed) == {parent.id, child.id, grandchild.id}
        remaining = await reply_repo.find_by_post(post.id)
        assert [r.id for r in remaining] == [sibling.id]

    @pytest.mark.asyncio
    async def test_duplicate_vote_violates_unique_constraint(self, integration_env):
        vote_repo = await integration_env.get(VoteRepository)
        user_id = UserId(uuid4())
        votable_id = uuid4()

        def vote() -> Vote:
            return Vote(
                id=VoteId(uuid4()),
                user_id=user_id,
                votable_type=VotableType.POST,
                votable_id=votable_id,
            )

        await vote_repo.add(vote())
        with pytest.raises(IntegrityError):
            await vote_repo.add(vote())

        assert await vote_repo.count_by_votable(VotableType.POST, votable_id) == 1


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_batched_lookup(self, integration_env):
        user_repo = await integration_env.get(UserRepository)
        users = [
            await user_repo.save(make_user("Aysel")),
            await user_repo.save(make_user("Nigar")),
        ]

        found = await user_repo.find_by_ids([u.id for u in users] + [UserId(uuid4())])

        assert {u.id for u in found} == {u.id for u in users}
