"""Retract vote use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.domain.service import VoteService
from discuss.domain.value import UserId, VotableType


class RetractVoteRequest(BaseModel):
    """Retract vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class RetractVoteResponse(BaseModel):
    """Retract vote response."""

    votable_type: VotableType
    votable_id: str
    removed: bool  # False if the user had not voted


class RetractVoteUseCase:
    """Use case for taking back an upvote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize retract vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: RetractVoteRequest) -> RetractVoteResponse:
        """Execute retract vote flow.

        Raises:
            NotFoundError: If the item doesn't exist
        """
        removed = await self.vote_service.retract_vote(
            UserId(UUID(request.user_id)),
            UUID(request.votable_id),
            request.votable_type,
        )
        return RetractVoteResponse(
            votable_type=request.votable_type,
            votable_id=request.votable_id,
            removed=removed,
        )
