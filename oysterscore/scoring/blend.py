"""Weighted blend of one taste attribute against its curator seed."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional, Tuple

from .determinism import ONE, safe_divide, to_decimal, weighted_sum


def blend_attribute(
    seed: object,
    observations: Iterable[Tuple[Optional[object], Decimal]],
    weight: Decimal,
) -> Decimal:
    """Blend community values for one attribute with the seed.

    user_avg = Σ(value·influence) / Σ(influence) over present values
    result   = (1 - weight)·seed + weight·user_avg

    The seed is returned unchanged when no review supplies the attribute,
    and stands in for user_avg when the total influence is zero.

    Args:
        seed: Curator seed value for the attribute
        observations: (value or None, influence) per review
        weight: User weight from the trust ramp

    Returns:
        Blended attribute value
    """
    seed_d = to_decimal(seed, "seed")
    present = [
        (to_decimal(value, "attribute"), infl)
        for value, infl in observations
        if value is not None
    ]
    if not present:
        return seed_d

    total, influence_total = weighted_sum(present)
    user_avg = safe_divide(total, influence_total, default=seed_d)
    return (ONE - weight) * seed_d + weight * user_avg


__all__ = ["blend_attribute"]
