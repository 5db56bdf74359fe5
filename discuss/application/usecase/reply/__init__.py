"""Reply use cases."""

from .create_reply import CreateReplyRequest, CreateReplyUseCase, ReplyItem
from .delete_reply import DeleteReplyRequest, DeleteReplyResponse, DeleteReplyUseCase
from .get_reply_tree import (
    GetReplyTreeRequest,
    GetReplyTreeResponse,
    GetReplyTreeUseCase,
    ReplyTreeItem,
)
from .update_reply import UpdateReplyRequest, UpdateReplyUseCase

__all__ = [
    "CreateReplyRequest",
    "CreateReplyUseCase",
    "DeleteReplyRequest",
    "DeleteReplyResponse",
    "DeleteReplyUseCase",
    "GetReplyTreeRequest",
    "GetReplyTreeResponse",
    "GetReplyTreeUseCase",
    "ReplyItem",
    "ReplyTreeItem",
    "UpdateReplyRequest",
    "UpdateReplyUseCase",
]
