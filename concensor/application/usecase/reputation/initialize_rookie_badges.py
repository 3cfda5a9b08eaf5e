"""Initialize rookie badges use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from concensor.application.usecase.base import BaseUseCase
from concensor.domain.service import ReputationService
from concensor.domain.value import UserId


class InitializeRookieBadgesRequest(BaseModel):
    """Initialize rookie badges request."""

    user_id: str  # Newly registered user
    now: datetime | None = None


class InitializeRookieBadgesResponse(BaseModel):
    """Initialize rookie badges response."""

    user_id: str
    created_category_ids: list[str]


class InitializeRookieBadgesUseCase(BaseUseCase):
    """Use case run at sign-up to give a user the Rookie badge everywhere."""

    def __init__(self, reputation_service: ReputationService) -> None:
        """Initialize use case.

        Args:
            reputation_service: Reputation domain service
        """
        self.reputation_service = reputation_service

    async def execute(
        self, request: InitializeRookieBadgesRequest
    ) -> InitializeRookieBadgesResponse:
        """Create Rookie rows in every main category the user lacks one in.

        Raises:
            NotFoundError: If the user does not exist
        """
        created = await self.reputation_service.initialize_rookie_badges(
            UserId(UUID(request.user_id)), request.now
        )
        return InitializeRookieBadgesResponse(
            user_id=request.user_id,
            created_category_ids=[str(row.category_id) for row in created],
        )
