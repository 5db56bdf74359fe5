"""User profile resolver."""

from typing import Iterable

import logfire

from discuss.domain.model.user import UserProfileSummary
from discuss.domain.repository import UserRepository
from discuss.domain.value import UserId

from .base import Service


class ProfileService(Service):
    """Resolves author ids into display profiles.

    A missing user is a normal outcome (deleted account, foreign id) and
    resolves to None rather than an error.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize profile service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def resolve(self, user_id: UserId) -> UserProfileSummary | None:
        """Resolve a single user's profile.

        Args:
            user_id: User ID

        Returns:
            Profile summary, or None if the user doesn't exist
        """
        with logfire.span("profile_service.resolve", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.debug("Profile not found", user_id=str(user_id))
                return None
            return UserProfileSummary.from_user(user)

    async def resolve_many(
        self, user_ids: Iterable[UserId]
    ) -> dict[UserId, UserProfileSummary | None]:
        """Resolve many profiles with a single batched lookup.

        Args:
            user_ids: User IDs (duplicates are collapsed)

        Returns:
            Mapping with an entry for every requested ID; missing users map
            to None
        """
        distinct_ids = list(dict.fromkeys(user_ids))
        if not distinct_ids:
            return {}

        with logfire.span(
            "profile_service.resolve_many", requested=len(distinct_ids)
        ):
            users = await self.user_repository.find_by_ids(distinct_ids)
            found = {user.id: UserProfileSummary.from_user(user) for user in users}

            profiles = {user_id: found.get(user_id) for user_id in distinct_ids}
            missing = sum(1 for profile in profiles.values() if profile is None)
            if missing:
                logfire.info(
                    "Some profiles could not be resolved",
                    requested=len(distinct_ids),
                    missing=missing,
                )
            return profiles
