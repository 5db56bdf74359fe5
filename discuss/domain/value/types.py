"""Domain value objects for the discussion forums.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from discuss.domain.value.common import RootValueObject, ValueObject


class Role(str, Enum):
    """Role of the acting user, as issued by the auth service."""

    USER = "user"
    AUTHOR = "author"
    ADMIN = "admin"

    @property
    def is_moderator(self) -> bool:
        """Admins and authors may moderate content they don't own."""
        return self in (Role.ADMIN, Role.AUTHOR)


class VoteType(str, Enum):
    """Type of vote.

    Votes express approval only.
    """

    UP = "up"


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    REPLY = "reply"


class Slug(RootValueObject[str]):
    """URL-safe slug for forums.

    Must be lowercase, alphanumeric with hyphens, 1-100 characters.
    Examples: 'pregnancy', 'baby-sleep', 'toddler-nutrition'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        if len(v) > 100:
            raise ValueError("Slug must be 1-100 characters")
        return v


class LocalizedText(ValueObject):
    """Text available in the site's two locales (Azerbaijani and Russian)."""

    az: str
    ru: str = ""

    def for_locale(self, locale: str) -> str:
        """Return text for a locale, falling back to the other one."""
        if locale == "ru":
            return self.ru or self.az
        return self.az or self.ru
