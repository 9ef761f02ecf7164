"""Review influence, the seed-vs-community trust ramp, and vote weights.

Three weighting layers feed the aggregate:

1. Review quality weight (community votes on the review, nominally 0.4-1.5)
2. Reviewer credibility (supplied by the caller, nominally 0.5-1.5)
3. User weight: how far community data overrides the curator seed, ramping
   linearly with review count up to a ceiling

The first two multiply into a per-review influence. Neither is clamped here:
out-of-range inputs produce a consistent, if unusual, result.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Tuple

from oysterscore.config.rating_params import RatingParams, get_rating_params

from .determinism import ZERO, clamp, to_decimal
from .types import ReviewInput, ValidationError


def influence(review: ReviewInput) -> Decimal:
    """quality_weight × reviewer_credibility for one review."""
    quality = to_decimal(review.quality_weight, "quality_weight")
    credibility = to_decimal(review.reviewer_credibility, "reviewer_credibility")
    return quality * credibility


def user_weight(review_count: int, params: RatingParams | None = None) -> Decimal:
    """Weight of community data relative to the seed for a review count.

    0 reviews gives 0 (pure seed); at or above the threshold gives the
    ceiling; in between the weight ramps linearly.
    """
    if review_count < 0:
        raise ValidationError(f"review_count must be >= 0, got {review_count}")
    ramp = (params or get_rating_params()).trust_ramp
    if review_count == 0:
        return ZERO
    if review_count >= ramp.threshold:
        return ramp.ceiling
    return Decimal(review_count) / Decimal(ramp.threshold) * ramp.ceiling


def review_quality_weight(
    agree_count: int,
    disagree_count: int,
    params: RatingParams | None = None,
) -> Tuple[Decimal, Decimal]:
    """Derive a review's quality weight from its votes.

    net = agrees·agree_weight + disagrees·disagree_weight
    weight = clamp(1 + net / scale, min_weight, max_weight)

    Returns:
        (net_vote_score, quality_weight)
    """
    if agree_count < 0 or disagree_count < 0:
        raise ValidationError(
            f"vote counts must be >= 0, got agrees={agree_count} disagrees={disagree_count}"
        )
    vp = (params or get_rating_params()).vote_weight
    net = Decimal(agree_count) * vp.agree_weight + Decimal(disagree_count) * vp.disagree_weight
    weight = clamp(Decimal("1") + net / vp.scale, vp.min_weight, vp.max_weight)
    return net, weight


__all__ = [
    "influence",
    "user_weight",
    "review_quality_weight",
]
