"""Tests for full oyster recomputation."""

import random
from decimal import Decimal

import pytest

from oysterscore.config.rating_params import RatingParams, TrustRampParams
from oysterscore.scoring.aggregate import (
    publish_overall_score,
    rating_stats,
    recompute,
    verdict_breakdown,
    weighted_verdict_average,
)
from oysterscore.scoring.types import (
    ATTRIBUTES,
    NotFoundError,
    OysterInput,
    ReviewInput,
    ValidationError,
    Verdict,
)
from oysterscore.scoring.weights import user_weight


def make_oyster(**seeds) -> OysterInput:
    values = {name: 5 for name in ATTRIBUTES}
    values.update(seeds)
    return OysterInput(oyster_id="oyster-1", name="Kumamoto", **values)


def full_review(verdict=Verdict.LOVE_IT, value=7, **kwargs) -> ReviewInput:
    attrs = {name: value for name in ATTRIBUTES}
    attrs.update(kwargs)
    return ReviewInput(verdict=verdict, **attrs)


class TestWorkedExamples:
    """The published worked examples, pinned exactly."""

    def test_no_reviews(self):
        """Seed size 5 with no reviews keeps the seed and the neutral score."""
        result = recompute(make_oyster(size=5), [])
        assert result.avg_size == 5
        assert result.overall_score == 5.0
        assert result.total_reviews == 0
        assert result.avg_rating == 0.0

    def test_single_review_size_blend(self):
        """One review of size 9 moves seed 5 to 5.56."""
        review = ReviewInput(
            verdict=Verdict.LIKE_IT,
            size=9,
            quality_weight=1.0,
            reviewer_credibility=1.0,
        )
        result = recompute(make_oyster(size=5), [review])
        assert result.avg_size == 5.56

    def test_five_top_verdicts(self):
        """Five LOVE_IT reviews at equal influence publish 9.0."""
        reviews = [ReviewInput(verdict=Verdict.LOVE_IT) for _ in range(5)]
        result = recompute(make_oyster(), reviews)
        assert result.avg_rating == 9.0
        assert result.overall_score == 9.0

    def test_overall_ignores_attributes(self):
        """The headline score comes from verdicts only, not attribute averages."""
        reviews = [full_review(Verdict.LOVE_IT, value=1) for _ in range(5)]
        result = recompute(make_oyster(), reviews)
        assert result.overall_score == 9.0


class TestRecompute:
    """Behavioural properties of recompute."""

    def test_missing_oyster_raises(self):
        with pytest.raises(NotFoundError):
            recompute(None, [])

    def test_unknown_verdict_raises(self):
        with pytest.raises(ValidationError):
            recompute(make_oyster(), [ReviewInput(verdict="HATED_IT")])

    def test_zero_reviews_every_attribute_is_seed(self):
        oyster = OysterInput("o", size=2, body=3, sweet_brininess=4, flavorfulness=8, creaminess=10)
        result = recompute(oyster, [])
        assert (result.avg_size, result.avg_body, result.avg_sweet_brininess) == (2, 3, 4)
        assert (result.avg_flavorfulness, result.avg_creaminess) == (8, 10)

    @pytest.mark.parametrize("count", [1, 2, 3, 4, 5, 8])
    def test_uniform_influence_matches_ramp(self, count):
        """With unit influence every attribute is (1-w)·seed + w·mean."""
        values = [3, 9, 6, 8, 4, 10, 7, 2][:count]
        reviews = [full_review(Verdict.MEH, value=v) for v in values]
        result = recompute(make_oyster(body=6), reviews)

        w = user_weight(count)
        mean = Decimal(sum(values)) / Decimal(count)
        expected = (1 - w) * Decimal(6) + w * mean
        assert result.avg_body == pytest.approx(float(expected))

    def test_missing_attribute_only_affects_that_attribute(self):
        """A review without size still counts toward the other four."""
        reviews = [
            full_review(Verdict.LIKE_IT, value=9, size=None),
            full_review(Verdict.LIKE_IT, value=9),
        ]
        result = recompute(make_oyster(), reviews)
        w = user_weight(2)  # ramp uses the total count
        assert result.avg_size == pytest.approx(float((1 - w) * 5 + w * 9))
        assert result.avg_body == pytest.approx(float((1 - w) * 5 + w * 9))

    def test_credibility_weights_verdicts(self):
        """A highly credible reviewer pulls avg_rating toward their verdict."""
        reviews = [
            ReviewInput(Verdict.LOVE_IT, reviewer_credibility=1.5),
            ReviewInput(Verdict.WHATEVER, reviewer_credibility=0.5),
        ]
        result = recompute(make_oyster(), reviews)
        # (9.0·1.5 + 2.5·0.5) / 2.0
        assert result.avg_rating == 7.375
        assert result.overall_score == 7.38

    def test_zero_total_influence(self):
        """Zero influence gives avg_rating 0 and seed attributes, without raising."""
        reviews = [full_review(Verdict.LOVE_IT, value=10, quality_weight=0.0)]
        result = recompute(make_oyster(size=4), reviews)
        assert result.avg_rating == 0.0
        assert result.overall_score == 0.0
        assert result.avg_size == 4
        assert result.total_reviews == 1

    def test_idempotent(self):
        """Same inputs give bit-identical results."""
        reviews = [
            full_review(Verdict.MEH, value=3, quality_weight=0.7, reviewer_credibility=1.3),
            full_review(Verdict.LIKE_IT, value=8, quality_weight=1.4, reviewer_credibility=0.6),
            ReviewInput(Verdict.WHATEVER, creaminess=2),
        ]
        oyster = make_oyster(size=7)
        assert recompute(oyster, reviews) == recompute(oyster, reviews)

    def test_overall_score_always_in_range(self):
        """Clamp holds for arbitrary, even out-of-range, inputs."""
        rng = random.Random(7)
        verdicts = list(Verdict)
        for _ in range(200):
            reviews = [
                ReviewInput(
                    verdict=rng.choice(verdicts),
                    size=rng.choice([None, rng.uniform(1, 10)]),
                    quality_weight=rng.uniform(0, 3),
                    reviewer_credibility=rng.uniform(0, 3),
                )
                for _ in range(rng.randint(0, 12))
            ]
            result = recompute(make_oyster(), reviews)
            assert 0.0 <= result.overall_score <= 10.0

    def test_boundary_params(self):
        """threshold=1 gives the ceiling weight from the first review."""
        params = RatingParams(trust_ramp=TrustRampParams(threshold=1, ceiling=Decimal("1")))
        result = recompute(make_oyster(size=5), [full_review(value=9)], params)
        assert result.avg_size == 9.0

    def test_as_row_has_every_aggregate_column(self):
        row = recompute(make_oyster(), []).as_row()
        assert set(row) == {
            "total_reviews",
            "avg_rating",
            "avg_size",
            "avg_body",
            "avg_sweet_brininess",
            "avg_flavorfulness",
            "avg_creaminess",
            "overall_score",
        }


class TestWeightedVerdictAverage:
    """Tests for weighted_verdict_average."""

    def test_empty(self):
        assert weighted_verdict_average([], []) == Decimal("0")

    def test_mixed_verdicts(self):
        reviews = [ReviewInput(Verdict.LIKE_IT), ReviewInput(Verdict.MEH)]
        ones = [Decimal("1"), Decimal("1")]
        assert weighted_verdict_average(reviews, ones) == Decimal("5.975")


class TestPublishOverallScore:
    """Tests for publish_overall_score."""

    def test_neutral_without_reviews(self):
        assert publish_overall_score(Decimal("8.3"), 0) == Decimal("5.0")

    def test_rounds_half_up(self):
        assert publish_overall_score(Decimal("5.975"), 2) == Decimal("5.98")

    def test_clamps_high(self):
        assert publish_overall_score(Decimal("12.5"), 3) == Decimal("10")

    def test_clamps_low(self):
        assert publish_overall_score(Decimal("-1"), 3) == Decimal("0")


class TestRatingStats:
    """Tests for verdict breakdown and rating stats."""

    def test_breakdown_includes_zero_levels(self):
        reviews = [ReviewInput(Verdict.LOVE_IT), ReviewInput(Verdict.LOVE_IT), ReviewInput(Verdict.MEH)]
        assert verdict_breakdown(reviews) == {
            Verdict.LOVE_IT: 2,
            Verdict.LIKE_IT: 0,
            Verdict.MEH: 1,
            Verdict.WHATEVER: 0,
        }

    def test_stats_with_full_ramp(self):
        reviews = [ReviewInput(Verdict.LIKE_IT) for _ in range(6)]
        stats = rating_stats(make_oyster(), reviews)
        assert stats.total_reviews == 6
        assert stats.user_weight == Decimal("0.7")
        assert stats.seed_weight == Decimal("0.3")
        assert stats.overall_score == 7.0

    def test_stats_without_reviews(self):
        stats = rating_stats(make_oyster(), [])
        assert stats.user_weight == Decimal("0")
        assert stats.seed_weight == Decimal("1")
        assert stats.overall_score == 5.0
        assert sum(stats.breakdown.values()) == 0
