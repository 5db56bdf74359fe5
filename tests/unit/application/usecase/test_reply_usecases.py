"""Unit tests for reply and vote use cases."""

from uuid import uuid4

import pytest

from discuss.application.usecase.reply import (
    CreateReplyRequest,
    CreateReplyUseCase,
    DeleteReplyRequest,
    DeleteReplyUseCase,
    GetReplyTreeRequest,
    GetReplyTreeUseCase,
    UpdateReplyRequest,
    UpdateReplyUseCase,
)
from discuss.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    RetractVoteRequest,
    RetractVoteUseCase,
)
from discuss.domain.error import AlreadyVotedError
from discuss.domain.repository import (
    ForumRepository,
    PostRepository,
    UserRepository,
)
from discuss.domain.value import Role, VotableType
from tests.conftest import make_forum, make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _seed(env):
    forum_repo = await env.get(ForumRepository)
    post_repo = await env.get(PostRepository)
    user_repo = await env.get(UserRepository)
    aysel = await user_repo.save(make_user("Aysel"))
    nigar = await user_repo.save(make_user("Nigar"))
    forum = await forum_repo.save(make_forum())
    post = await post_repo.add(make_post(forum.id, aysel.id))
    return post, aysel, nigar


async def _reply(env, post, author, body, parent_id=None):
    create_reply = await env.get(CreateReplyUseCase)
    return await create_reply.execute(
        CreateReplyRequest(
            post_id=str(post.id),
            body=body,
            author_id=str(author.id),
            parent_id=parent_id,
        )
    )


class TestReplyTreeUseCase:
    @pytest.mark.asyncio
    async def test_vitamins_conversation(self, unit_env):
        """Nigar answers, Aysel follows up, the reader sees the nested tree."""
        # Arrange
        post, aysel, nigar = await _seed(unit_env)
        r1 = await _reply(unit_env, post, nigar, "Vitamin D too")
        r2 = await _reply(unit_env, post, aysel, "How much?", parent_id=r1.reply_id)
        cast_vote = await unit_env.get(CastVoteUseCase)
        await cast_vote.execute(
            CastVoteRequest(
                votable_type=VotableType.REPLY,
                votable_id=r1.reply_id,
                user_id=str(aysel.id),
            )
        )
        get_tree = await unit_env.get(GetReplyTreeUseCase)

        # Act
        response = await get_tree.execute(
            GetReplyTreeRequest(post_id=str(post.id), user_id=str(aysel.id))
        )

        # Assert
        assert response.total == 2
        [root] = response.replies
        assert root.reply_id == r1.reply_id
        assert root.author_name == "Nigar"
        assert root.upvote_count == 1
        assert root.has_voted is True
        assert root.tree_depth == 0
        [child] = root.children
        assert child.reply_id == r2.reply_id
        assert child.author_name == "Aysel"
        assert child.has_voted is False
        assert child.tree_depth == 1
        assert child.can_reply is True

    @pytest.mark.asyncio
    async def test_anonymous_reader(self, unit_env):
        post, _, nigar = await _seed(unit_env)
        await _reply(unit_env, post, nigar, "Hello")
        get_tree = await unit_env.get(GetReplyTreeUseCase)

        response = await get_tree.execute(GetReplyTreeRequest(post_id=str(post.id)))

        assert response.replies[0].has_voted is False


class TestEditAndDeleteReply:
    @pytest.mark.asyncio
    async def test_moderator_edit_then_owner_delete(self, unit_env):
        post, _, nigar = await _seed(unit_env)
        reply = await _reply(unit_env, post, nigar, "Typo")
        update_reply = await unit_env.get(UpdateReplyUseCase)
        delete_reply = await unit_env.get(DeleteReplyUseCase)

        edited = await update_reply.execute(
            UpdateReplyRequest(
                reply_id=reply.reply_id,
                body="Fixed",
                user_id=str(uuid4()),
                role=Role.ADMIN,
            )
        )
        deleted = await delete_reply.execute(
            DeleteReplyRequest(reply_id=reply.reply_id, user_id=str(nigar.id))
        )

        assert edited.body == "Fixed"
        assert edited.author_name == "Nigar"
        assert deleted.removed == 1


class TestVoteUseCases:
    @pytest.mark.asyncio
    async def test_cast_twice_then_retract(self, unit_env):
        post, _, nigar = await _seed(unit_env)
        cast_vote = await unit_env.get(CastVoteUseCase)
        retract_vote = await unit_env.get(RetractVoteUseCase)
        request = CastVoteRequest(
            votable_type=VotableType.POST,
            votable_id=str(post.id),
            user_id=str(nigar.id),
        )

        cast = await cast_vote.execute(request)
        with pytest.raises(AlreadyVotedError):
            await cast_vote.execute(request)
        retracted = await retract_vote.execute(
            RetractVoteRequest(
                votable_type=VotableType.POST,
                votable_id=str(post.id),
                user_id=str(nigar.id),
            )
        )

        assert cast.votable_id == str(post.id)
        assert retracted.removed is True
