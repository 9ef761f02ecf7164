"""Type definitions for the rating aggregation engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Tuple


class ScoringError(Exception):
    """Base class for aggregation failures."""

    pass


class ValidationError(ScoringError):
    """Raised when an input violates the engine's contract."""

    pass


class NotFoundError(ScoringError):
    """Raised when the oyster to aggregate does not exist."""

    pass


class Verdict(str, Enum):
    """Reviewer verdict, ordered from most to least positive."""

    LOVE_IT = "LOVE_IT"
    LIKE_IT = "LIKE_IT"
    MEH = "MEH"
    WHATEVER = "WHATEVER"


# Most positive first
VERDICT_ORDER: Tuple[Verdict, ...] = (
    Verdict.LOVE_IT,
    Verdict.LIKE_IT,
    Verdict.MEH,
    Verdict.WHATEVER,
)

ATTRIBUTES: Tuple[str, ...] = (
    "size",
    "body",
    "sweet_brininess",
    "flavorfulness",
    "creaminess",
)


# ─────────────────────────────────────────────────────────────────────────────
# Engine inputs
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ReviewInput:
    """One review as seen by the engine, with reviewer credibility joined in."""

    verdict: Verdict | str
    size: Optional[float] = None
    body: Optional[float] = None
    sweet_brininess: Optional[float] = None
    flavorfulness: Optional[float] = None
    creaminess: Optional[float] = None
    quality_weight: float = 1.0
    reviewer_credibility: float = 1.0
    review_id: Optional[str] = None

    def attribute(self, name: str) -> Optional[float]:
        return getattr(self, name)


@dataclass(frozen=True)
class OysterInput:
    """Curator seed values for one oyster."""

    oyster_id: str
    size: float
    body: float
    sweet_brininess: float
    flavorfulness: float
    creaminess: float
    name: str = ""

    def seed(self, name: str) -> float:
        return getattr(self, name)


# ─────────────────────────────────────────────────────────────────────────────
# Engine outputs
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class AggregateResult:
    """Published aggregate fields for one oyster."""

    total_reviews: int
    avg_rating: float
    avg_size: float
    avg_body: float
    avg_sweet_brininess: float
    avg_flavorfulness: float
    avg_creaminess: float
    overall_score: float

    def as_row(self) -> Dict[str, float | int]:
        """Column values in storage naming."""
        return {
            "total_reviews": self.total_reviews,
            "avg_rating": self.avg_rating,
            "avg_size": self.avg_size,
            "avg_body": self.avg_body,
            "avg_sweet_brininess": self.avg_sweet_brininess,
            "avg_flavorfulness": self.avg_flavorfulness,
            "avg_creaminess": self.avg_creaminess,
            "overall_score": self.overall_score,
        }


@dataclass(frozen=True)
class VerdictLabel:
    """Display label for a 0-10 score."""

    verdict: Verdict
    label: str
    emoji: str
    meaning: str


@dataclass(frozen=True)
class RatingStats:
    """Summary of how an oyster's aggregate was formed."""

    total_reviews: int
    breakdown: Dict[Verdict, int]
    user_weight: Decimal
    seed_weight: Decimal
    avg_rating: float
    overall_score: float


@dataclass
class BatchReport:
    """Outcome of recomputing many oysters."""

    results: Dict[str, AggregateResult] = field(default_factory=dict)
    failed: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.results)

    @property
    def ok(self) -> bool:
        return not self.failed


__all__ = [
    "ScoringError",
    "ValidationError",
    "NotFoundError",
    "Verdict",
    "VERDICT_ORDER",
    "ATTRIBUTES",
    "ReviewInput",
    "OysterInput",
    "AggregateResult",
    "VerdictLabel",
    "RatingStats",
    "BatchReport",
]
