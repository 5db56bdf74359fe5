"""Application layer DI providers."""

from dishka import Scope, provide

from discuss.application.usecase.forum import GetForumUseCase, ListForumsUseCase
from discuss.application.usecase.post import (
    ChangePostStateUseCase,
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
)
from discuss.application.usecase.reply import (
    CreateReplyUseCase,
    DeleteReplyUseCase,
    GetReplyTreeUseCase,
    UpdateReplyUseCase,
)
from discuss.application.usecase.vote import CastVoteUseCase, RetractVoteUseCase
from discuss.domain.service import (
    ForumService,
    PostService,
    ProfileService,
    ReplyService,
    VoteService,
)
from discuss.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Forum use cases
    @provide(scope=Scope.REQUEST)
    def get_list_forums_use_case(self, forum_service: ForumService) -> ListForumsUseCase:
        """Provide list forums use case."""
        return ListForumsUseCase(forum_service=forum_service)

    @provide(scope=Scope.REQUEST)
    def get_get_forum_use_case(
        self, forum_service: ForumService, post_service: PostService
    ) -> GetForumUseCase:
        """Provide get forum use case."""
        return GetForumUseCase(forum_service=forum_service, post_service=post_service)

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self, post_service: PostService, profile_service: ProfileService
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(
            post_service=post_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self,
        post_service: PostService,
        profile_service: ProfileService,
        vote_service: VoteService,
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(
            post_service=post_service,
            profile_service=profile_service,
            vote_service=vote_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self,
        forum_service: ForumService,
        post_service: PostService,
        profile_service: ProfileService,
        vote_service: VoteService,
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(
            forum_service=forum_service,
            post_service=post_service,
            profile_service=profile_service,
            vote_service=vote_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_change_post_state_use_case(
        self, post_service: PostService, profile_service: ProfileService
    ) -> ChangePostStateUseCase:
        """Provide change post state use case."""
        return ChangePostStateUseCase(
            post_service=post_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(self, post_service: PostService) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(post_service=post_service)

    # Reply use cases
    @provide(scope=Scope.REQUEST)
    def get_create_reply_use_case(
        self, reply_service: ReplyService, profile_service: ProfileService
    ) -> CreateReplyUseCase:
        """Provide create reply use case."""
        return CreateReplyUseCase(
            reply_service=reply_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_reply_tree_use_case(
        self, reply_service: ReplyService, vote_service: VoteService
    ) -> GetReplyTreeUseCase:
        """Provide get reply tree use case."""
        return GetReplyTreeUseCase(
            reply_service=reply_service, vote_service=vote_service
        )

    @provide(scope=Scope.REQUEST)
    def get_update_reply_use_case(
        self, reply_service: ReplyService, profile_service: ProfileService
    ) -> UpdateReplyUseCase:
        """Provide update reply use case."""
        return UpdateReplyUseCase(
            reply_service=reply_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_reply_use_case(
        self, reply_service: ReplyService
    ) -> DeleteReplyUseCase:
        """Provide delete reply use case."""
        return DeleteReplyUseCase(reply_service=reply_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_retract_vote_use_case(
        self, vote_service: VoteService
    ) -> RetractVoteUseCase:
        """Provide retract vote use case."""
        return RetractVoteUseCase(vote_service=vote_service)
