"""User record and the profile projection used for author attribution.

User records are owned by the site's account system; the discussion
engine only reads them.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel
from discuss.domain.value import Role, UserId

ANONYMOUS_DISPLAY_NAME = "Anonymous"


class User(DomainModel):
    """User record as stored by the account system."""

    id: UserId
    display_name: str = Field(min_length=1, max_length=255)
    avatar_url: Optional[str] = None
    role: Role = Role.USER
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class UserProfileSummary(DomainModel):
    """Read-only projection of a user for rendering author attribution."""

    user_id: UserId
    display_name: str
    avatar_url: Optional[str] = None
    role: Role = Role.USER

    @classmethod
    def from_user(cls, user: User) -> "UserProfileSummary":
        """Project a user record."""
        return cls(
            user_id=user.id,
            display_name=user.display_name,
            avatar_url=user.avatar_url,
            role=user.role,
        )
