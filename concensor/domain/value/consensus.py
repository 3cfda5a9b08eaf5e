"""Consensus breakdown of a post's sentiment votes.

Computed for display from the post's counters, never stored.
"""

from collections.abc import Mapping

from concensor.domain.value.common import ValueObject
from concensor.domain.value.types import VoteType


class ConsensusBreakdown(ValueObject):
    """Share of votes per sentiment bucket and per coarse group.

    Percentages are in 0..100. A post without votes reports 0 everywhere.
    """

    total_votes: int
    buckets: dict[VoteType, float]
    agree: float
    neutral: float
    disagree: float

    @classmethod
    def from_counts(cls, counts: Mapping[VoteType, int]) -> "ConsensusBreakdown":
        """Build a breakdown from per-bucket vote counts."""
        total = sum(counts.get(t, 0) for t in VoteType)

        def pct(n: int) -> float:
            return n * 100.0 / total if total else 0.0

        buckets = {t: pct(counts.get(t, 0)) for t in VoteType}
        return cls(
            total_votes=total,
            buckets=buckets,
            agree=pct(
                counts.get(VoteType.STRONGLY_AGREE, 0) + counts.get(VoteType.AGREE, 0)
            ),
            neutral=pct(counts.get(VoteType.NEUTRAL, 0)),
            disagree=pct(
                counts.get(VoteType.STRONGLY_DISAGREE, 0)
                + counts.get(VoteType.DISAGREE, 0)
            ),
        )
