"""Vote entity.

Votes express one user's approval of one post or reply.
Each user can cast one vote per item.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from discuss.domain.model.common import DomainModel
from discuss.domain.value import UserId, VotableType, VoteId, VoteType


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per item (enforced by storage unique constraint)
    - Only upvotes
    - Polymorphic reference to votable (post or reply)
    """

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: UUID  # PostId or ReplyId (both are UUIDs)
    vote_type: VoteType = VoteType.UP
    created_at: datetime = Field(default_factory=datetime.now)
