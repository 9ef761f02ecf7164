"""Rating aggregation engine.

Turns an oyster's curator seed values and its reviews into published
aggregate scores:
- Verdict to score mapping and reverse display lookup
- Per-review influence and the seed-vs-community trust ramp
- Weighted attribute blending
- Full recomputation, single and batch
"""

from __future__ import annotations

from .aggregate import (
    publish_overall_score,
    rating_stats,
    recompute,
    verdict_breakdown,
    weighted_verdict_average,
)
from .batch import recompute_many
from .blend import blend_attribute
from .types import (
    ATTRIBUTES,
    VERDICT_ORDER,
    AggregateResult,
    BatchReport,
    NotFoundError,
    OysterInput,
    RatingStats,
    ReviewInput,
    ScoringError,
    ValidationError,
    Verdict,
    VerdictLabel,
)
from .verdicts import parse_verdict, score_of, score_to_stars, verdict_for_score
from .weights import influence, review_quality_weight, user_weight

__all__ = [
    "ATTRIBUTES",
    "VERDICT_ORDER",
    "AggregateResult",
    "BatchReport",
    "NotFoundError",
    "OysterInput",
    "RatingStats",
    "ReviewInput",
    "ScoringError",
    "ValidationError",
    "Verdict",
    "VerdictLabel",
    "blend_attribute",
    "influence",
    "parse_verdict",
    "publish_overall_score",
    "rating_stats",
    "recompute",
    "recompute_many",
    "review_quality_weight",
    "score_of",
    "score_to_stars",
    "user_weight",
    "verdict_breakdown",
    "verdict_for_score",
    "weighted_verdict_average",
]
