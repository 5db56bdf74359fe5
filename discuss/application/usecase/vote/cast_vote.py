"""Cast vote use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from discuss.domain.service import VoteService
from discuss.domain.value import UserId, VotableType


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    vote_id: str
    votable_type: VotableType
    votable_id: str
    created_at: datetime


class CastVoteUseCase:
    """Use case for upvoting a post or reply."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Raises:
            NotFoundError: If the item doesn't exist
            AlreadyVotedError: If the user already voted on it
        """
        vote = await self.vote_service.cast_vote(
            UserId(UUID(request.user_id)),
            UUID(request.votable_id),
            request.votable_type,
        )
        return CastVoteResponse(
            vote_id=str(vote.id),
            votable_type=vote.votable_type,
            votable_id=str(vote.votable_id),
            created_at=vote.created_at,
        )
