"""Unit tests for ForumService."""

from uuid import uuid4

import pytest

from discuss.domain.error import NotFoundError
from discuss.domain.repository import ForumRepository, PostRepository
from discuss.domain.service import ForumService
from discuss.domain.value import ForumId, Slug, UserId
from tests.conftest import make_forum, make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestListForums:
    @pytest.mark.asyncio
    async def test_display_order_and_live_counts(self, unit_env):
        # Arrange
        forum_service = await unit_env.get(ForumService)
        forum_repo = await unit_env.get(ForumRepository)
        post_repo = await unit_env.get(PostRepository)
        sleep = await forum_repo.save(make_forum("baby-sleep", "Sleep", order=2))
        vitamins = await forum_repo.save(make_forum("vitamins", "Vitamins", order=1))
        await forum_repo.save(make_forum("archive", "Archive", is_active=False))
        await post_repo.add(make_post(vitamins.id, UserId(uuid4())))
        await post_repo.add(make_post(vitamins.id, UserId(uuid4())))

        # Act
        listings = await forum_service.list_forums()

        # Assert
        assert [entry.forum.id for entry in listings] == [vitamins.id, sleep.id]
        assert [entry.post_count for entry in listings] == [2, 0]

    @pytest.mark.asyncio
    async def test_include_inactive(self, unit_env):
        forum_service = await unit_env.get(ForumService)
        forum_repo = await unit_env.get(ForumRepository)
        await forum_repo.save(make_forum("archive", "Archive", is_active=False))

        listings = await forum_service.list_forums(active_only=False)

        assert len(listings) == 1


class TestGetForum:
    @pytest.mark.asyncio
    async def test_by_slug(self, unit_env):
        forum_service = await unit_env.get(ForumService)
        forum_repo = await unit_env.get(ForumRepository)
        forum = await forum_repo.save(make_forum("vitamins"))

        found = await forum_service.get_forum_by_slug(Slug("vitamins"))

        assert found.id == forum.id

    @pytest.mark.asyncio
    async def test_unknown_slug(self, unit_env):
        forum_service = await unit_env.get(ForumService)

        with pytest.raises(NotFoundError):
            await forum_service.get_forum_by_slug(Slug("nope"))

    @pytest.mark.asyncio
    async def test_unknown_id(self, unit_env):
        forum_service = await unit_env.get(ForumService)

        with pytest.raises(NotFoundError):
            await forum_service.get_forum(ForumId(uuid4()))
