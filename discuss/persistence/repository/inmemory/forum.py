"""In-memory forum repository for testing."""

from typing import Optional

from discuss.domain.model.forum import Forum
from discuss.domain.repository.forum import ForumRepository
from discuss.domain.value import ForumId, Slug


class InMemoryForumRepository(ForumRepository):
    """In-memory implementation of ForumRepository for testing."""

    def __init__(self) -> None:
        self._forums: dict[ForumId, Forum] = {}

    async def find_by_id(self, forum_id: ForumId) -> Optional[Forum]:
        return self._forums.get(forum_id)

    async def find_by_slug(self, slug: Slug) -> Optional[Forum]:
        for forum in self._forums.values():
            if forum.slug == slug:
                return forum
        return None

    async def find_all(self, active_only: bool = True) -> list[Forum]:
        forums = [f for f in self._forums.values() if f.is_active or not active_only]
        forums.sort(key=lambda f: (f.order, f.created_at))
        return forums

    async def save(self, forum: Forum) -> Forum:
        self._forums[forum.id] = forum
        return forum
