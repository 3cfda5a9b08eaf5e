"""Get user points use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from concensor.domain.service import ReputationService
from concensor.domain.value import UserId


class CategoryPointsItem(BaseModel):
    """Per-category reputation in response."""

    category_id: str
    points: int
    peak_points: int
    current_badge_level: int
    current_badge_name: str
    peak_badge_level: int
    peak_badge_name: str
    next_level_points: int | None  # None at the top level
    last_login_date: datetime | None


class GetUserPointsRequest(BaseModel):
    """Get user points request."""

    user_id: str


class GetUserPointsResponse(BaseModel):
    """Get user points response."""

    user_id: str
    total_points: int
    peak_points: int
    equipped_badge_category_id: str | None
    category_points: list[CategoryPointsItem]


class GetUserPointsUseCase:
    """Use case for reading a user's points and badges."""

    def __init__(self, reputation_service: ReputationService) -> None:
        """Initialize get user points use case.

        Args:
            reputation_service: Reputation domain service
        """
        self.reputation_service = reputation_service

    async def execute(self, request: GetUserPointsRequest) -> GetUserPointsResponse:
        """Execute get user points flow.

        Args:
            request: Get user points request

        Returns:
            Totals plus category rows, highest points first

        Raises:
            NotFoundError: If the user does not exist
        """
        user_id = UserId(UUID(request.user_id))
        user = await self.reputation_service.get_user(user_id)
        rows = await self.reputation_service.get_category_points(user_id)

        items = [
            CategoryPointsItem(
                category_id=str(row.category_id),
                points=row.points,
                peak_points=row.peak_points,
                current_badge_level=int(row.current_badge_level),
                current_badge_name=row.current_badge_level.label,
                peak_badge_level=int(row.peak_badge_level),
                peak_badge_name=row.peak_badge_level.label,
                next_level_points=self.reputation_service.next_level_points(
                    row.current_badge_level
                ),
                last_login_date=row.last_login_date,
            )
            for row in rows
        ]

        return GetUserPointsResponse(
            user_id=request.user_id,
            total_points=user.total_points,
            peak_points=user.peak_points,
            equipped_badge_category_id=(
                str(user.equipped_badge_category_id)
                if user.equipped_badge_category_id
                else None
            ),
            category_points=items,
        )
