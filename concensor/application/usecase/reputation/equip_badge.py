"""Equip badge use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from concensor.domain.service import ReputationService
from concensor.domain.value import CategoryId, UserId


class EquipBadgeRequest(BaseModel):
    """Equip badge request."""

    user_id: str
    category_id: str  # Main category UUID
    now: datetime | None = None


class EquipBadgeResponse(BaseModel):
    """Equip badge response."""

    user_id: str
    equipped_badge_category_id: str | None  # None after unequipping
    equipped: bool


class EquipBadgeUseCase:
    """Use case for toggling the badge a user displays."""

    def __init__(self, reputation_service: ReputationService) -> None:
        """Initialize equip badge use case.

        Args:
            reputation_service: Reputation domain service
        """
        self.reputation_service = reputation_service

    async def execute(self, request: EquipBadgeRequest) -> EquipBadgeResponse:
        """Execute equip badge flow.

        Equipping the badge that is already equipped unequips it.

        Raises:
            NotFoundError: If the user or category does not exist
            InvalidArgumentError: If the category is not a main category
        """
        user = await self.reputation_service.toggle_equipped_badge(
            UserId(UUID(request.user_id)),
            CategoryId(UUID(request.category_id)),
            request.now,
        )
        equipped = user.equipped_badge_category_id
        return EquipBadgeResponse(
            user_id=request.user_id,
            equipped_badge_category_id=str(equipped) if equipped else None,
            equipped=equipped is not None,
        )
