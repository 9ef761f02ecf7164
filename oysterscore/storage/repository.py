from __future__ import annotations

import datetime as dt
from typing import List, Optional, Tuple

from sqlalchemy import String, select, type_coerce, update

from oysterscore.scoring.types import AggregateResult, OysterInput, ReviewInput
from oysterscore.scoring.verdicts import parse_verdict

from .dbm import DBM
from .schema import Oyster, Review, User


_SELECT_OYSTER = select(
    Oyster.id,
    Oyster.name,
    Oyster.size,
    Oyster.body,
    Oyster.sweet_brininess,
    Oyster.flavorfulness,
    Oyster.creaminess,
)

_SELECT_REVIEWS = (
    select(
        Review.id,
        # Raw label, so an unknown value surfaces as ValidationError
        type_coerce(Review.rating, String).label("rating"),
        Review.size,
        Review.body,
        Review.sweet_brininess,
        Review.flavorfulness,
        Review.creaminess,
        Review.weighted_score,
        User.credibility_score,
    )
    .join(User, Review.user_id == User.id)
    .order_by(Review.created_at, Review.id)
)


def _oyster_input(row) -> OysterInput:
    return OysterInput(
        oyster_id=row["id"],
        name=row["name"],
        size=row["size"],
        body=row["body"],
        sweet_brininess=row["sweet_brininess"],
        flavorfulness=row["flavorfulness"],
        creaminess=row["creaminess"],
    )


def _review_input(row) -> ReviewInput:
    weight = row["weighted_score"]
    credibility = row["credibility_score"]
    return ReviewInput(
        review_id=row["id"],
        verdict=parse_verdict(row["rating"]),
        size=row["size"],
        body=row["body"],
        sweet_brininess=row["sweet_brininess"],
        flavorfulness=row["flavorfulness"],
        creaminess=row["creaminess"],
        quality_weight=1.0 if weight is None else weight,
        reviewer_credibility=1.0 if credibility is None else credibility,
    )


async def load_oyster_reviews(
    dbm: DBM,
    oyster_id: str,
) -> Optional[Tuple[OysterInput, List[ReviewInput]]]:
    """Load an oyster's seeds and full review set from one snapshot.

    Returns:
        (oyster, reviews) or None if the oyster does not exist

    Raises:
        ValidationError: If a stored review carries an unknown rating label
    """
    async with dbm.session() as session:
        async with session.begin():
            oyster_rows = (
                await session.execute(_SELECT_OYSTER.where(Oyster.id == oyster_id))
            ).mappings().all()
            if not oyster_rows:
                return None
            review_rows = (
                await session.execute(_SELECT_REVIEWS.where(Review.oyster_id == oyster_id))
            ).mappings().all()

    return _oyster_input(oyster_rows[0]), [_review_input(r) for r in review_rows]


async def list_oyster_ids(dbm: DBM) -> List[str]:
    rows = await dbm.read(select(Oyster.id).order_by(Oyster.name, Oyster.id))
    return [row["id"] for row in rows]


async def write_aggregate(dbm: DBM, oyster_id: str, result: AggregateResult) -> int:
    """Write every aggregate column of one oyster in a single UPDATE."""
    stmt = (
        update(Oyster)
        .where(Oyster.id == oyster_id)
        .values(**result.as_row(), updated_at=dt.datetime.now(dt.timezone.utc))
    )
    return await dbm.write(stmt)


async def set_review_votes(
    dbm: DBM,
    review_id: str,
    *,
    agree_count: int,
    disagree_count: int,
    net_vote_score: float,
    weighted_score: float,
) -> Optional[str]:
    """Store a review's vote tallies and quality weight.

    Returns:
        The review's oyster id, or None if the review does not exist
    """
    async with dbm.session() as session:
        async with session.begin():
            oyster_id = (
                await session.execute(select(Review.oyster_id).where(Review.id == review_id))
            ).scalar_one_or_none()
            if oyster_id is None:
                return None
            await session.execute(
                update(Review)
                .where(Review.id == review_id)
                .values(
                    agree_count=agree_count,
                    disagree_count=disagree_count,
                    net_vote_score=net_vote_score,
                    weighted_score=weighted_score,
                )
            )
    return oyster_id


__all__ = [
    "load_oyster_reviews",
    "list_oyster_ids",
    "write_aggregate",
    "set_review_votes",
]
