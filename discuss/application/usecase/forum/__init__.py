"""Forum catalog use cases."""

from .get_forum import GetForumRequest, GetForumUseCase
from .list_forums import (
    ForumItem,
    ListForumsRequest,
    ListForumsResponse,
    ListForumsUseCase,
)

__all__ = [
    "ForumItem",
    "GetForumRequest",
    "GetForumUseCase",
    "ListForumsRequest",
    "ListForumsResponse",
    "ListForumsUseCase",
]
