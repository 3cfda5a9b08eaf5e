"""Domain layer DI providers."""

from dishka import Scope, provide

from concensor.config import DecaySettings, PointsSettings, RankingSettings
from concensor.domain.repository import (
    CategoryPointsRepository,
    CategoryRepository,
    CommentRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from concensor.domain.service import (
    CommentService,
    PostService,
    ReputationService,
    VoteService,
)
from concensor.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each request gets fresh service instances sharing one transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_post_service(
        self, post_repository: PostRepository, ranking: RankingSettings
    ) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository, ranking=ranking)

    @provide
    def get_vote_service(
        self, vote_repository: VoteRepository, post_service: PostService
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(vote_repository=vote_repository, post_service=post_service)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository, post_service: PostService
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository, post_service=post_service
        )

    @provide
    def get_reputation_service(
        self,
        category_points_repository: CategoryPointsRepository,
        user_repository: UserRepository,
        category_repository: CategoryRepository,
        points_settings: PointsSettings,
        decay_settings: DecaySettings,
    ) -> ReputationService:
        """Provide reputation domain service."""
        return ReputationService(
            category_points_repository=category_points_repository,
            user_repository=user_repository,
            category_repository=category_repository,
            points_settings=points_settings,
            decay_settings=decay_settings,
        )
