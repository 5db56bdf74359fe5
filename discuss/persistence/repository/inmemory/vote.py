"""In-memory vote repository for testing."""

from typing import Optional, Sequence, Union
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from discuss.domain.model.vote import Vote
from discuss.domain.repository.vote import VoteRepository
from discuss.domain.value import PostId, ReplyId, UserId, VotableType


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing.

    Votes are keyed by (user, type, item), mirroring the unique constraint
    of the PostgreSQL table.
    """

    def __init__(self) -> None:
        self._votes: dict[tuple[UserId, VotableType, UUID], Vote] = {}

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, ReplyId],
    ) -> Optional[Vote]:
        return self._votes.get((user_id, votable_type, UUID(str(votable_id))))

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[Union[PostId, ReplyId]],
    ) -> list[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        votable_uuids = {UUID(str(vid)) for vid in votable_ids}
        return [
            v
            for (uid, vtype, vid), v in self._votes.items()
            if uid == user_id and vtype == votable_type and vid in votable_uuids
        ]

    async def add(self, vote: Vote) -> Vote:
        """Insert a vote.

        Raises:
            IntegrityError: If vote already exists (duplicate)
        """
        key = (vote.user_id, vote.votable_type, vote.votable_id)
        if key in self._votes:
            raise IntegrityError("Duplicate vote", None, Exception())
        self._votes[key] = vote
        return vote

    async def delete_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, ReplyId],
    ) -> bool:
        key = (user_id, votable_type, UUID(str(votable_id)))
        return self._votes.pop(key, None) is not None

    async def delete_by_votables(
        self,
        votable_type: VotableType,
        votable_ids: Sequence[Union[PostId, ReplyId]],
    ) -> int:
        votable_uuids = {UUID(str(vid)) for vid in votable_ids}
        doomed = [
            key
            for key in self._votes
            if key[1] == votable_type and key[2] in votable_uuids
        ]
        for key in doomed:
            del self._votes[key]
        return len(doomed)

    async def count_by_votable(
        self,
        votable_type: VotableType,
        votable_id: Union[PostId, ReplyId],
    ) -> int:
        votable_uuid = UUID(str(votable_id))
        return sum(
            1
            for (_, vtype, vid) in self._votes
            if vtype == votable_type and vid == votable_uuid
        )
