"""Unit tests for domain value objects."""

import pytest
from pydantic import ValidationError

from concensor.domain.error import InvalidArgumentError
from concensor.domain.value import ConsensusBreakdown, Username, VoteType


class TestVoteType:
    """Tests for VoteType."""

    def test_values_map_bijectively(self):
        """Each bucket has a distinct value in -2..2 and maps back."""
        scores = [t.value_score for t in VoteType]

        assert sorted(scores) == [-2, -1, 0, 1, 2]
        for vote_type in VoteType:
            assert VoteType.from_value_score(vote_type.value_score) is vote_type

    def test_from_invalid_value(self):
        """Values outside -2..2 are rejected."""
        with pytest.raises(InvalidArgumentError):
            VoteType.from_value_score(3)

    def test_parse(self):
        """Raw strings parse into buckets."""
        assert VoteType.parse("strongly_agree") is VoteType.STRONGLY_AGREE

    @pytest.mark.parametrize("raw", ["upvote", "", "AGREE", "1"])
    def test_parse_rejects_unknown(self, raw):
        """Unknown vote types are invalid arguments."""
        with pytest.raises(InvalidArgumentError, match="Invalid vote type"):
            VoteType.parse(raw)


class TestConsensusBreakdown:
    """Tests for ConsensusBreakdown."""

    def test_no_votes(self):
        """A post without votes reports zero everywhere."""
        breakdown = ConsensusBreakdown.from_counts({})

        assert breakdown.total_votes == 0
        assert breakdown.agree == breakdown.neutral == breakdown.disagree == 0.0
        assert set(breakdown.buckets.values()) == {0.0}

    def test_groups_sum_to_hundred(self):
        """Group shares cover every vote."""
        breakdown = ConsensusBreakdown.from_counts(
            {
                VoteType.STRONGLY_DISAGREE: 1,
                VoteType.DISAGREE: 2,
                VoteType.NEUTRAL: 3,
                VoteType.AGREE: 4,
                VoteType.STRONGLY_AGREE: 5,
            }
        )

        assert breakdown.total_votes == 15
        assert breakdown.agree + breakdown.neutral + breakdown.disagree == (
            pytest.approx(100.0)
        )
        assert breakdown.agree == pytest.approx(60.0)
        assert breakdown.buckets[VoteType.NEUTRAL] == pytest.approx(20.0)


class TestUsername:
    """Tests for Username."""

    @pytest.mark.parametrize("name", ["bob", "alice_smith", "X-99"])
    def test_valid(self, name):
        """Letters, digits, underscores and hyphens are allowed."""
        assert str(Username(name)) == name

    @pytest.mark.parametrize("name", ["ab", "a" * 31, "has space", "émile"])
    def test_invalid(self, name):
        """Short, long or oddly-charactered names are rejected."""
        with pytest.raises(ValidationError):
            Username(name)
