"""Rating aggregation parameters.

All aggregation constants live here so that:
1. There is a single source of truth for the trust ramp and verdict table
2. Tests can inject boundary values (e.g. threshold=1) without patching
3. Published scores stay reproducible for a given parameter set

Changing these values changes every published oyster score; run the
recalculate entrypoint afterwards.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field, model_validator


class TrustRampParams(BaseModel):
    """How much community data outweighs the curator seed, by review count."""

    ceiling: Decimal = Field(
        default=Decimal("0.7"),
        ge=Decimal("0"),
        le=Decimal("1"),
        description="User weight reached once review count hits the threshold.",
    )
    threshold: int = Field(
        default=5,
        ge=1,
        le=1000,
        description="Review count at which the user weight stops ramping.",
    )


# Inclusive display band of each verdict level on the 0-10 scale.
# A level's score must fall inside its own band so the reverse lookup
# maps it back to the same level.
VERDICT_DISPLAY_BANDS = {
    "love_it": (Decimal("8.0"), Decimal("10.0")),
    "like_it": (Decimal("6.0"), Decimal("7.9")),
    "meh": (Decimal("4.0"), Decimal("5.9")),
    "whatever": (Decimal("1.0"), Decimal("3.9")),
}


class VerdictScaleParams(BaseModel):
    """Representative 0-10 score for each verdict level."""

    love_it: Decimal = Field(default=Decimal("9.0"), ge=Decimal("0"), le=Decimal("10"))
    like_it: Decimal = Field(default=Decimal("7.0"), ge=Decimal("0"), le=Decimal("10"))
    meh: Decimal = Field(default=Decimal("4.95"), ge=Decimal("0"), le=Decimal("10"))
    whatever: Decimal = Field(default=Decimal("2.5"), ge=Decimal("0"), le=Decimal("10"))

    @model_validator(mode="after")
    def _ordered_within_bands(self) -> "VerdictScaleParams":
        levels = [self.love_it, self.like_it, self.meh, self.whatever]
        for upper, lower in zip(levels, levels[1:]):
            if not upper > lower:
                raise ValueError(
                    f"verdict scores must be strictly decreasing, got {[str(v) for v in levels]}"
                )
        for name, (low, high) in VERDICT_DISPLAY_BANDS.items():
            score = getattr(self, name)
            if not low <= score <= high:
                raise ValueError(
                    f"{name} score {score} must lie in its display band [{low}, {high}]"
                )
        return self


class PublicationParams(BaseModel):
    """How the headline score is published."""

    neutral_score: Decimal = Field(
        default=Decimal("5.0"),
        ge=Decimal("0"),
        le=Decimal("10"),
        description="Overall score shown for an oyster without reviews.",
    )
    decimal_places: int = Field(
        default=2,
        ge=0,
        le=6,
        description="Rounding precision of the overall score.",
    )
    score_min: Decimal = Field(default=Decimal("0"), description="Lower clamp bound.")
    score_max: Decimal = Field(default=Decimal("10"), description="Upper clamp bound.")


class VoteWeightParams(BaseModel):
    """Conversion of agree/disagree votes into a review quality weight."""

    agree_weight: Decimal = Field(
        default=Decimal("1.0"),
        ge=Decimal("0"),
        le=Decimal("10"),
        description="Net vote contribution per agree vote.",
    )
    disagree_weight: Decimal = Field(
        default=Decimal("-0.6"),
        ge=Decimal("-10"),
        le=Decimal("0"),
        description="Net vote contribution per disagree vote.",
    )
    scale: Decimal = Field(
        default=Decimal("10"),
        gt=Decimal("0"),
        description="Net vote score divisor: weight = 1 + net / scale.",
    )
    min_weight: Decimal = Field(default=Decimal("0.4"), ge=Decimal("0"))
    max_weight: Decimal = Field(default=Decimal("1.5"), ge=Decimal("0"))

    @model_validator(mode="after")
    def _ordered_bounds(self) -> "VoteWeightParams":
        if self.min_weight > self.max_weight:
            raise ValueError("min_weight must not exceed max_weight")
        return self


class RatingParams(BaseModel):
    """Master configuration for rating aggregation."""

    trust_ramp: TrustRampParams = Field(default_factory=TrustRampParams)
    verdict_scale: VerdictScaleParams = Field(default_factory=VerdictScaleParams)
    publication: PublicationParams = Field(default_factory=PublicationParams)
    vote_weight: VoteWeightParams = Field(default_factory=VoteWeightParams)


# Default instance for easy import
DEFAULT_RATING_PARAMS = RatingParams()


def get_rating_params() -> RatingParams:
    """Get the process-wide rating parameters."""
    return DEFAULT_RATING_PARAMS


__all__ = [
    "VERDICT_DISPLAY_BANDS",
    "TrustRampParams",
    "VerdictScaleParams",
    "PublicationParams",
    "VoteWeightParams",
    "RatingParams",
    "DEFAULT_RATING_PARAMS",
    "get_rating_params",
]
