"""Verdict to score mapping and the reverse display lookup."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Tuple

from oysterscore.config.rating_params import VERDICT_DISPLAY_BANDS, RatingParams, get_rating_params

from .determinism import round_decimal, to_decimal
from .types import VERDICT_ORDER, ValidationError, Verdict, VerdictLabel


_LABELS = (
    VerdictLabel(Verdict.LOVE_IT, "Love It", "\u2764\ufe0f", "This is perfection. My new favorite."),
    VerdictLabel(Verdict.LIKE_IT, "Like It", "\U0001f44d", "Really good. Would order again."),
    VerdictLabel(Verdict.MEH, "Meh", "\U0001f610", "Fine. Nothing special."),
    VerdictLabel(Verdict.WHATEVER, "Whatever", "\U0001f937", "Not for me. Skip."),
)

# (low, high, label), inclusive on both ends
VERDICT_BANDS: Tuple[Tuple[Decimal, Decimal, VerdictLabel], ...] = tuple(
    (*VERDICT_DISPLAY_BANDS[label.verdict.value.lower()], label) for label in _LABELS
)

FALLBACK_LABEL: VerdictLabel = VERDICT_BANDS[2][2]


def parse_verdict(verdict: Verdict | str) -> Verdict:
    """Coerce a label to a Verdict.

    Raises:
        ValidationError: If the label is not one of the four levels
    """
    if isinstance(verdict, Verdict):
        return verdict
    try:
        return Verdict(verdict)
    except ValueError:
        raise ValidationError(f"unknown verdict {verdict!r}")


def verdict_scores(params: RatingParams | None = None) -> Dict[Verdict, Decimal]:
    """The verdict table, most positive level first."""
    scale = (params or get_rating_params()).verdict_scale
    return {
        Verdict.LOVE_IT: scale.love_it,
        Verdict.LIKE_IT: scale.like_it,
        Verdict.MEH: scale.meh,
        Verdict.WHATEVER: scale.whatever,
    }


def score_of(verdict: Verdict | str, params: RatingParams | None = None) -> Decimal:
    """Representative 0-10 score for a verdict.

    Raises:
        ValidationError: If the verdict is unknown
    """
    return verdict_scores(params)[parse_verdict(verdict)]


def verdict_for_score(score: object) -> VerdictLabel:
    """Display label for a 0-10 score.

    Scores outside every band (e.g. 7.95 or 0.5) get the Meh label.
    """
    d = to_decimal(score, "score")
    for low, high, label in VERDICT_BANDS:
        if low <= d <= high:
            return label
    return FALLBACK_LABEL


def score_to_stars(score: object) -> float:
    """Convert a 0-10 score to 0-5 stars with one decimal."""
    d = to_decimal(score, "score")
    return float(round_decimal(d / 2, places=1))


__all__ = [
    "VERDICT_BANDS",
    "VERDICT_ORDER",
    "FALLBACK_LABEL",
    "parse_verdict",
    "verdict_scores",
    "score_of",
    "verdict_for_score",
    "score_to_stars",
]
