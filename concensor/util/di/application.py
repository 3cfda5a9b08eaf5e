"""Application layer DI providers."""

from dishka import Scope, provide

from concensor.application.usecase.comment import (
    CreateCommentUseCase,
    GetCommentsUseCase,
)
from concensor.application.usecase.post import CreatePostUseCase, ListHotPostsUseCase
from concensor.application.usecase.reputation import (
    EquipBadgeUseCase,
    GetUserPointsUseCase,
    InitializeRookieBadgesUseCase,
    LoginDecayUseCase,
)
from concensor.application.usecase.vote import CastVoteUseCase, GetUserVoteUseCase
from concensor.domain.service import (
    CommentService,
    PostService,
    ReputationService,
    VoteService,
)
from concensor.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self, vote_service: VoteService, reputation_service: ReputationService
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(
            vote_service=vote_service, reputation_service=reputation_service
        )

    @provide(scope=Scope.REQUEST)
    def get_user_vote_use_case(self, vote_service: VoteService) -> GetUserVoteUseCase:
        """Provide get user vote use case."""
        return GetUserVoteUseCase(vote_service=vote_service)

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self, post_service: PostService, reputation_service: ReputationService
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(
            post_service=post_service, reputation_service=reputation_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_hot_posts_use_case(
        self, post_service: PostService
    ) -> ListHotPostsUseCase:
        """Provide list hot posts use case."""
        return ListHotPostsUseCase(post_service=post_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        reputation_service: ReputationService,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            post_service=post_service,
            reputation_service=reputation_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_comments_use_case(
        self,
        comment_service: CommentService,
        vote_service: VoteService,
        reputation_service: ReputationService,
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            comment_service=comment_service,
            vote_service=vote_service,
            reputation_service=reputation_service,
        )

    # Reputation use cases
    @provide(scope=Scope.REQUEST)
    def get_login_decay_use_case(
        self, reputation_service: ReputationService
    ) -> LoginDecayUseCase:
        """Provide login decay use case."""
        return LoginDecayUseCase(reputation_service=reputation_service)

    @provide(scope=Scope.REQUEST)
    def get_user_points_use_case(
        self, reputation_service: ReputationService
    ) -> GetUserPointsUseCase:
        """Provide get user points use case."""
        return GetUserPointsUseCase(reputation_service=reputation_service)

    @provide(scope=Scope.REQUEST)
    def get_equip_badge_use_case(
        self, reputation_service: ReputationService
    ) -> EquipBadgeUseCase:
        """Provide equip badge use case."""
        return EquipBadgeUseCase(reputation_service=reputation_service)

    @provide(scope=Scope.REQUEST)
    def get_initialize_rookie_badges_use_case(
        self, reputation_service: ReputationService
    ) -> InitializeRookieBadgesUseCase:
        """Provide initialize rookie badges use case."""
        return InitializeRookieBadgesUseCase(reputation_service=reputation_service)
