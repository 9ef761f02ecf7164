"""Full recomputation of an oyster's published aggregates.

Flow:
1. Resolve each review's influence (quality weight × credibility)
2. Weighted verdict average -> avg_rating (no seed blending)
3. Trust-ramp user weight from the total review count
4. Blend each of the five attributes against its seed independently
5. Publish overall_score from avg_rating (5.0 when there are no reviews)

Everything here is pure: the same (oyster, reviews, params) always yields
an identical AggregateResult.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from oysterscore.config.rating_params import RatingParams, get_rating_params

from .blend import blend_attribute
from .determinism import ONE, ZERO, clamp, round_decimal, safe_divide, to_float, weighted_sum
from .types import (
    ATTRIBUTES,
    VERDICT_ORDER,
    AggregateResult,
    NotFoundError,
    OysterInput,
    RatingStats,
    ReviewInput,
    Verdict,
)
from .verdicts import parse_verdict, score_of
from .weights import influence, user_weight


def weighted_verdict_average(
    reviews: Sequence[ReviewInput],
    influences: Sequence[Decimal],
    params: RatingParams | None = None,
) -> Decimal:
    """Σ(score_of(verdict)·influence) / Σ(influence); 0 if empty or zero-weight."""
    if not reviews:
        return ZERO
    pairs = [(score_of(r.verdict, params), infl) for r, infl in zip(reviews, influences)]
    total, influence_total = weighted_sum(pairs)
    return safe_divide(total, influence_total, default=ZERO)


def publish_overall_score(
    avg_rating: Decimal,
    review_count: int,
    params: RatingParams | None = None,
) -> Decimal:
    """Headline score: neutral when unreviewed, else rounded and clamped avg_rating."""
    pub = (params or get_rating_params()).publication
    if review_count == 0:
        return pub.neutral_score
    rounded = round_decimal(avg_rating, places=pub.decimal_places)
    return clamp(rounded, pub.score_min, pub.score_max)


def recompute(
    oyster: Optional[OysterInput],
    reviews: Sequence[ReviewInput],
    params: RatingParams | None = None,
) -> AggregateResult:
    """Recompute every aggregate field of one oyster from scratch.

    Args:
        oyster: Seed values of the oyster
        reviews: The oyster's complete current review set
        params: Aggregation parameters (process defaults if None)

    Returns:
        AggregateResult ready to be persisted as one record

    Raises:
        NotFoundError: If oyster is None
        ValidationError: If a review carries an unknown verdict or a
            non-numeric value
    """
    if oyster is None:
        raise NotFoundError("oyster not found")

    params = params or get_rating_params()
    reviews = list(reviews)
    review_count = len(reviews)
    influences: List[Decimal] = [influence(r) for r in reviews]

    avg_rating = weighted_verdict_average(reviews, influences, params)
    weight = user_weight(review_count, params)

    blended: Dict[str, Decimal] = {}
    for name in ATTRIBUTES:
        observations = [(r.attribute(name), infl) for r, infl in zip(reviews, influences)]
        blended[name] = blend_attribute(oyster.seed(name), observations, weight)

    overall = publish_overall_score(avg_rating, review_count, params)

    return AggregateResult(
        total_reviews=review_count,
        avg_rating=to_float(avg_rating),
        avg_size=to_float(blended["size"]),
        avg_body=to_float(blended["body"]),
        avg_sweet_brininess=to_float(blended["sweet_brininess"]),
        avg_flavorfulness=to_float(blended["flavorfulness"]),
        avg_creaminess=to_float(blended["creaminess"]),
        overall_score=to_float(overall),
    )


def verdict_breakdown(reviews: Sequence[ReviewInput]) -> Dict[Verdict, int]:
    """Count reviews per verdict level, zeros included."""
    counts: Dict[Verdict, int] = {v: 0 for v in VERDICT_ORDER}
    for r in reviews:
        counts[parse_verdict(r.verdict)] += 1
    return counts


def rating_stats(
    oyster: Optional[OysterInput],
    reviews: Sequence[ReviewInput],
    params: RatingParams | None = None,
) -> RatingStats:
    """Breakdown and seed/community split behind an oyster's scores."""
    result = recompute(oyster, reviews, params)
    weight = user_weight(result.total_reviews, params)
    return RatingStats(
        total_reviews=result.total_reviews,
        breakdown=verdict_breakdown(reviews),
        user_weight=weight,
        seed_weight=ONE - weight,
        avg_rating=result.avg_rating,
        overall_score=result.overall_score,
    )


__all__ = [
    "weighted_verdict_average",
    "publish_overall_score",
    "recompute",
    "verdict_breakdown",
    "rating_stats",
]
