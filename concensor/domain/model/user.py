"""User aggregate root.

Only the reputation side of an account lives here: totals across
categories, the all-time peak, and the equipped badge.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from concensor.domain.model.common import DomainModel
from concensor.domain.value import CategoryId, UserId, Username
from concensor.util.time import utcnow


class User(DomainModel):
    """User aggregate root."""

    id: UserId
    username: Username
    total_points: int = Field(default=0, ge=0)
    peak_points: int = Field(default=0, ge=0)
    equipped_badge_category_id: Optional[CategoryId] = None
    last_login_date: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def validate_peak(self) -> "User":
        """Peak points is a high-water mark of total points."""
        if self.peak_points < self.total_points:
            raise ValueError("peak_points must be >= total_points")
        return self
