"""Domain layer DI providers."""

from dishka import Scope, provide

from discuss.config import AuthSettings, ForumSettings
from discuss.domain.repository import (
    ForumRepository,
    PostRepository,
    ReplyRepository,
    UserRepository,
    VoteRepository,
)
from discuss.domain.service import (
    ForumService,
    JWTService,
    PostService,
    ProfileService,
    ReplyService,
    VoteService,
)
from discuss.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_profile_service(self, user_repository: UserRepository) -> ProfileService:
        """Provide author profile resolver."""
        return ProfileService(user_repository=user_repository)

    @provide
    def get_forum_service(
        self, forum_repository: ForumRepository, post_repository: PostRepository
    ) -> ForumService:
        """Provide forum catalog service."""
        return ForumService(
            forum_repository=forum_repository, post_repository=post_repository
        )

    @provide
    def get_post_service(
        self,
        post_repository: PostRepository,
        forum_repository: ForumRepository,
        reply_repository: ReplyRepository,
        vote_repository: VoteRepository,
        forum_settings: ForumSettings,
    ) -> PostService:
        """Provide post lifecycle service."""
        return PostService(
            post_repository=post_repository,
            forum_repository=forum_repository,
            reply_repository=reply_repository,
            vote_repository=vote_repository,
            forum_settings=forum_settings,
        )

    @provide
    def get_reply_service(
        self,
        reply_repository: ReplyRepository,
        post_repository: PostRepository,
        vote_repository: VoteRepository,
        profile_service: ProfileService,
        forum_settings: ForumSettings,
    ) -> ReplyService:
        """Provide reply domain service."""
        return ReplyService(
            reply_repository=reply_repository,
            post_repository=post_repository,
            vote_repository=vote_repository,
            profile_service=profile_service,
            forum_settings=forum_settings,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        reply_repository: ReplyRepository,
    ) -> VoteService:
        """Provide vote ledger service."""
        return VoteService(
            vote_repository=vote_repository,
            post_repository=post_repository,
            reply_repository=reply_repository,
        )
