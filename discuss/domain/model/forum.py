"""Forum entity.

Forums are named discussion categories. They are created and edited by
the admin back-office; the discussion engine only reads them.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel
from discuss.domain.value import ForumId, LocalizedText, Slug


class Forum(DomainModel):
    """Forum entity.

    Posts can only be created in active forums. ``post_count`` is a
    denormalized counter maintained by the admin tooling; listings use a
    live count instead.
    """

    id: ForumId
    slug: Slug
    name: LocalizedText
    description: Optional[LocalizedText] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    is_active: bool = True
    order: int = 0  # Display order in forum listings
    post_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
