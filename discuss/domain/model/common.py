"""Shared base for forum entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable entity; repositories hand out updated copies via model_copy."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
