"""Per-category reputation of a user.

One row per (user, category), created lazily on the first qualifying
action with the Rookie badge. ``points`` and ``current_badge_level`` move
with awards and decay; the peak fields are a permanent high-water mark.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from concensor.domain.model.common import DomainModel
from concensor.domain.value import BadgeLevel, CategoryId, CategoryPointsId, UserId


class UserCategoryPoints(DomainModel):
    """Points and badge level of a user in one main category."""

    id: CategoryPointsId
    user_id: UserId
    category_id: CategoryId
    points: int = Field(default=0, ge=0)
    peak_points: int = Field(default=0, ge=0)
    current_badge_level: BadgeLevel = BadgeLevel.ROOKIE
    peak_badge_level: BadgeLevel = BadgeLevel.ROOKIE
    last_login_date: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_peaks(self) -> "UserCategoryPoints":
        """Peaks never sit below the current values."""
        if self.peak_points < self.points:
            raise ValueError("peak_points must be >= points")
        if self.peak_badge_level < self.current_badge_level:
            raise ValueError("peak_badge_level must be >= current_badge_level")
        return self
