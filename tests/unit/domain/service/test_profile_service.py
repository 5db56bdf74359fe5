"""Unit tests for ProfileService."""

from uuid import uuid4

import pytest

from discuss.domain.repository import UserRepository
from discuss.domain.service import ProfileService
from discuss.domain.value import Role, UserId
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestResolve:
    @pytest.mark.asyncio
    async def test_resolves_existing_user(self, unit_env):
        profile_service = await unit_env.get(ProfileService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("Aysel", Role.AUTHOR))

        profile = await profile_service.resolve(user.id)

        assert profile is not None
        assert profile.display_name == "Aysel"
        assert profile.role == Role.AUTHOR

    @pytest.mark.asyncio
    async def test_missing_user_resolves_to_none(self, unit_env):
        profile_service = await unit_env.get(ProfileService)

        assert await profile_service.resolve(UserId(uuid4())) is None


class TestResolveMany:
    @pytest.mark.asyncio
    async def test_single_lookup_for_many_ids(self, unit_env):
        """Duplicates collapse and the store is queried exactly once."""
        # Arrange
        profile_service = await unit_env.get(ProfileService)
        user_repo = await unit_env.get(UserRepository)
        first = await user_repo.save(make_user("Aysel"))
        second = await user_repo.save(make_user("Nigar"))
        missing = UserId(uuid4())
        before = user_repo.lookup_count

        # Act
        profiles = await profile_service.resolve_many(
            [first.id, second.id, first.id, missing]
        )

        # Assert
        assert user_repo.lookup_count == before + 1
        assert set(profiles) == {first.id, second.id, missing}
        assert profiles[first.id].display_name == "Aysel"
        assert profiles[second.id].display_name == "Nigar"
        assert profiles[missing] is None

    @pytest.mark.asyncio
    async def test_empty_input_skips_lookup(self, unit_env):
        profile_service = await unit_env.get(ProfileService)
        user_repo = await unit_env.get(UserRepository)
        before = user_repo.lookup_count

        assert await profile_service.resolve_many([]) == {}
        assert user_repo.lookup_count == before
