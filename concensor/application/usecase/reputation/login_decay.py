"""Login decay use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from concensor.domain.service import ReputationService
from concensor.domain.value import UserId


class LoginDecayRequest(BaseModel):
    """Login decay request."""

    user_id: str
    now: datetime | None = None


class LoginDecayResponse(BaseModel):
    """Login decay response."""

    user_id: str
    total_points: int
    peak_points: int
    last_login_date: datetime | None


class LoginDecayUseCase:
    """Use case run once per successful login to apply inactivity decay."""

    def __init__(self, reputation_service: ReputationService) -> None:
        """Initialize login decay use case.

        Args:
            reputation_service: Reputation domain service
        """
        self.reputation_service = reputation_service

    async def execute(self, request: LoginDecayRequest) -> LoginDecayResponse:
        """Execute login decay flow.

        Raises:
            NotFoundError: If the user does not exist
        """
        user_id = UserId(UUID(request.user_id))
        await self.reputation_service.apply_login_decay(user_id, request.now)
        user = await self.reputation_service.get_user(user_id)

        return LoginDecayResponse(
            user_id=request.user_id,
            total_points=user.total_points,
            peak_points=user.peak_points,
            last_login_date=user.last_login_date,
        )
