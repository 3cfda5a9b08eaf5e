"""Badge a user displays next to their content."""

from concensor.domain.value.common import ValueObject
from concensor.domain.value.identifiers import CategoryId
from concensor.domain.value.types import BadgeLevel


class EquippedBadge(ValueObject):
    """A user's equipped category badge at its current level."""

    category_id: CategoryId
    category_name: str
    level: BadgeLevel

    @property
    def label(self) -> str:
        """Display label, e.g. ``"Science-Expert"``."""
        return f"{self.category_name}-{self.level.label}"
