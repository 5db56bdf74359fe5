"""Domain services."""

from . import moderation
from .base import Service
from .forum_service import ForumListing, ForumService
from .jwt_service import JWTService
from .post_service import PostService
from .profile_service import ProfileService
from .reply_service import ReplyNode, ReplyService
from .vote_service import VoteService

__all__ = [
    "ForumListing",
    "ForumService",
    "JWTService",
    "PostService",
    "ProfileService",
    "ReplyNode",
    "ReplyService",
    "Service",
    "VoteService",
    "moderation",
]
