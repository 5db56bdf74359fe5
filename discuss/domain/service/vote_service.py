"""Vote ledger service."""

from datetime import datetime
from typing import Sequence
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from discuss.domain.error import AlreadyVotedError, NotFoundError
from discuss.domain.model.vote import Vote
from discuss.domain.repository import PostRepository, ReplyRepository, VoteRepository
from discuss.domain.value import PostId, ReplyId, UserId, VotableType, VoteId, VoteType

from .base import Service


class VoteService(Service):
    """Domain service for vote operations.

    The storage unique constraint on (voter, target) is the only duplicate
    check, so concurrent casts by the same voter yield exactly one vote.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        reply_repository: ReplyRepository,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            post_repository: Post repository
            reply_repository: Reply repository
        """
        self.vote_repository = vote_repository
        self.post_repository = post_repository
        self.reply_repository = reply_repository

    async def has_voted(
        self, voter_id: UserId, target_id: UUID, target_kind: VotableType
    ) -> bool:
        vote = await self.vote_repository.find_by_user_and_votable(
            voter_id, target_kind, target_id
        )
        return vote is not None

    async def has_voted_many(
        self,
        voter_id: UserId,
        target_ids: Sequence[UUID],
        target_kind: VotableType,
    ) -> dict[UUID, bool]:
        """Check which items a user has voted on.

        Args:
            voter_id: User ID
            target_ids: Item IDs to check
            target_kind: Type of the items

        Returns:
            Dictionary mapping each item ID to whether the user has voted
        """
        if not target_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        votes = await self.vote_repository.find_by_user_and_votables(
            user_id=voter_id,
            votable_type=target_kind,
            votable_ids=target_ids,
        )
        voted_ids = {vote.votable_id for vote in votes}
        return {target_id: target_id in voted_ids for target_id in target_ids}

    async def cast_vote(
        self, voter_id: UserId, target_id: UUID, target_kind: VotableType
    ) -> Vote:
        """Upvote a post or reply.

        Creates the vote record, then atomically increments the target's
        upvote counter.

        Args:
            voter_id: Voting user ID
            target_id: Post or reply ID
            target_kind: Type of the target

        Returns:
            Created vote

        Raises:
            NotFoundError: If the target doesn't exist
            AlreadyVotedError: If the user already voted on the target
        """
        with logfire.span(
            "vote_service.cast_vote",
            voter_id=str(voter_id),
            target_id=str(target_id),
            target_kind=target_kind.value,
        ):
            await self._require_target(target_id, target_kind)

            vote = Vote(
                id=VoteId(uuid4()),
                user_id=voter_id,
                votable_type=target_kind,
                votable_id=target_id,
                vote_type=VoteType.UP,
                created_at=datetime.now(),
            )

            try:
                saved = await self.vote_repository.add(vote)
            except IntegrityError:
                logfire.warn(
                    "Duplicate vote attempt",
                    voter_id=str(voter_id),
                    target_id=str(target_id),
                )
                raise AlreadyVotedError(target_kind.value, str(target_id))

            await self.apply_vote_to_counter(target_kind, target_id)
            logfire.info(
                "Vote cast",
                voter_id=str(voter_id),
                target_id=str(target_id),
                target_kind=target_kind.value,
            )
            return saved

    async def apply_vote_to_counter(
        self, target_kind: VotableType, target_id: UUID
    ) -> None:
        """Atomically increment the target's upvote counter.

        Uses SQL-level increment to avoid race conditions.
        """
        await self._add_to_counter(target_kind, target_id, 1)

    async def retract_vote(
        self, voter_id: UserId, target_id: UUID, target_kind: VotableType
    ) -> bool:
        """Remove a user's vote and decrement the target's counter.

        Args:
            voter_id: Voting user ID
            target_id: Post or reply ID
            target_kind: Type of the target

        Returns:
            True if a vote was removed, False if the user hadn't voted

        Raises:
            NotFoundError: If the target doesn't exist
        """
        with logfire.span(
            "vote_service.retract_vote",
            voter_id=str(voter_id),
            target_id=str(target_id),
            target_kind=target_kind.value,
        ):
            await self._require_target(target_id, target_kind)

            deleted = await self.vote_repository.delete_by_user_and_votable(
                user_id=voter_id,
                votable_type=target_kind,
                votable_id=target_id,
            )

            if deleted:
                await self._add_to_counter(target_kind, target_id, -1)
                logfire.info(
                    "Vote retracted",
                    voter_id=str(voter_id),
                    target_id=str(target_id),
                )
            else:
                logfire.info(
                    "No vote to retract",
                    voter_id=str(voter_id),
                    target_id=str(target_id),
                )

            return deleted

    async def _require_target(self, target_id: UUID, target_kind: VotableType) -> None:
        if target_kind == VotableType.POST:
            target = await self.post_repository.find_by_id(PostId(target_id))
        else:
            target = await self.reply_repository.find_by_id(ReplyId(target_id))

        if not target:
            logfire.warn(
                "Vote target not found",
                target_id=str(target_id),
                target_kind=target_kind.value,
            )
            raise NotFoundError(target_kind.value.capitalize(), str(target_id))

    async def _add_to_counter(
        self, target_kind: VotableType, target_id: UUID, delta: int
    ) -> None:
        if target_kind == VotableType.POST:
            await self.post_repository.add_to_upvote_count(PostId(target_id), delta)
        else:
            await self.reply_repository.add_to_upvote_count(ReplyId(target_id), delta)
