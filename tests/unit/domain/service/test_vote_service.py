"""Unit tests for VoteService."""

import asyncio
from uuid import uuid4

import pytest

from discuss.domain.error import AlreadyVotedError, NotFoundError
from discuss.domain.repository import (
    ForumRepository,
    PostRepository,
    ReplyRepository,
    VoteRepository,
)
from discuss.domain.service import VoteService
from discuss.domain.value import PostId, UserId, VotableType
from tests.conftest import make_forum, make_post, make_reply
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


async def _seed_post(env):
    forum_repo = await env.get(ForumRepository)
    post_repo = await env.get(PostRepository)
    forum = await forum_repo.save(make_forum())
    return await post_repo.add(make_post(forum.id, UserId(uuid4())))


class TestCastVote:
    """Tests for cast_vote method."""

    @pytest.mark.asyncio
    async def test_vote_increments_post_counter(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed_post(unit_env)
        voter_id = UserId(uuid4())

        # Act
        vote = await vote_service.cast_vote(voter_id, post.id, VotableType.POST)

        # Assert
        assert vote.user_id == voter_id
        assert vote.votable_id == post.id
        assert (await post_repo.find_by_id(post.id)).upvote_count == 1
        assert await vote_service.has_voted(voter_id, post.id, VotableType.POST)

    @pytest.mark.asyncio
    async def test_vote_increments_reply_counter(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        reply_repo = await unit_env.get(ReplyRepository)
        post = await _seed_post(unit_env)
        reply = await reply_repo.add(make_reply(post.id, UserId(uuid4())))

        await vote_service.cast_vote(UserId(uuid4()), reply.id, VotableType.REPLY)

        assert (await reply_repo.find_by_id(reply.id)).upvote_count == 1

    @pytest.mark.asyncio
    async def test_second_vote_rejected_counter_unchanged(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed_post(unit_env)
        voter_id = UserId(uuid4())
        await vote_service.cast_vote(voter_id, post.id, VotableType.POST)

        with pytest.raises(AlreadyVotedError):
            await vote_service.cast_vote(voter_id, post.id, VotableType.POST)

        assert (await post_repo.find_by_id(post.id)).upvote_count == 1

    @pytest.mark.asyncio
    async def test_concurrent_votes_by_same_user(self, unit_env):
        """Exactly one of several simultaneous votes is recorded."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        vote_repo = await unit_env.get(VoteRepository)
        post = await _seed_post(unit_env)
        voter_id = UserId(uuid4())

        # Act
        results = await asyncio.gather(
            *(
                vote_service.cast_vote(voter_id, post.id, VotableType.POST)
                for _ in range(5)
            ),
            return_exceptions=True,
        )

        # Assert
        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 4
        assert all(isinstance(f, AlreadyVotedError) for f in failures)
        assert await vote_repo.count_by_votable(VotableType.POST, post.id) == 1
        assert (await post_repo.find_by_id(post.id)).upvote_count == 1

    @pytest.mark.asyncio
    async def test_missing_target(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError, match="Post"):
            await vote_service.cast_vote(
                UserId(uuid4()), PostId(uuid4()), VotableType.POST
            )


class TestRetractVote:
    @pytest.mark.asyncio
    async def test_retract_decrements(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed_post(unit_env)
        voter_id = UserId(uuid4())
        await vote_service.cast_vote(voter_id, post.id, VotableType.POST)

        removed = await vote_service.retract_vote(voter_id, post.id, VotableType.POST)

        assert removed is True
        assert (await post_repo.find_by_id(post.id)).upvote_count == 0
        assert not await vote_service.has_voted(voter_id, post.id, VotableType.POST)

    @pytest.mark.asyncio
    async def test_retract_without_vote_is_noop(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed_post(unit_env)
        await vote_service.cast_vote(UserId(uuid4()), post.id, VotableType.POST)

        removed = await vote_service.retract_vote(
            UserId(uuid4()), post.id, VotableType.POST
        )

        assert removed is False
        assert (await post_repo.find_by_id(post.id)).upvote_count == 1

    @pytest.mark.asyncio
    async def test_vote_again_after_retract(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed_post(unit_env)
        voter_id = UserId(uuid4())

        await vote_service.cast_vote(voter_id, post.id, VotableType.POST)
        await vote_service.retract_vote(voter_id, post.id, VotableType.POST)
        await vote_service.cast_vote(voter_id, post.id, VotableType.POST)

        assert (await post_repo.find_by_id(post.id)).upvote_count == 1


class TestHasVotedMany:
    @pytest.mark.asyncio
    async def test_batch_vote_state(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        first = await _seed_post(unit_env)
        second = await _seed_post(unit_env)
        voter_id = UserId(uuid4())
        await vote_service.cast_vote(voter_id, first.id, VotableType.POST)

        state = await vote_service.has_voted_many(
            voter_id, [first.id, second.id], VotableType.POST
        )

        assert state == {first.id: True, second.id: False}

    @pytest.mark.asyncio
    async def test_empty_batch(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        assert await vote_service.has_voted_many(
            UserId(uuid4()), [], VotableType.POST
        ) == {}
