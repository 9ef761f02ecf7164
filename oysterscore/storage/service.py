"""Recalculation service tying storage to the aggregation engine.

Recalculation must run after every review create, update or delete and
after every vote change on a review. Each run reloads the oyster's full
review set and recomputes from scratch; the aggregate is then written as
one record.
"""

from __future__ import annotations

import logging
from typing import Optional

from oysterscore.config.rating_params import RatingParams, get_rating_params
from oysterscore.scoring.aggregate import rating_stats, recompute
from oysterscore.scoring.types import AggregateResult, BatchReport, NotFoundError, RatingStats
from oysterscore.scoring.weights import review_quality_weight

from .dbm import DBM
from .repository import list_oyster_ids, load_oyster_reviews, set_review_votes, write_aggregate


class RatingService:
    """Recalculates and persists oyster aggregates."""

    def __init__(
        self,
        dbm: DBM,
        params: RatingParams | None = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.dbm = dbm
        self.params = params or get_rating_params()
        self.logger = logger or logging.getLogger(__name__)

    async def recalculate_oyster(self, oyster_id: str) -> AggregateResult:
        """Recompute and store one oyster's aggregates.

        Raises:
            NotFoundError: If the oyster does not exist
            ValidationError: If one of its reviews is malformed
        """
        loaded = await load_oyster_reviews(self.dbm, oyster_id)
        if loaded is None:
            raise NotFoundError(f"oyster not found: {oyster_id}")
        oyster, reviews = loaded

        result = recompute(oyster, reviews, self.params)
        await write_aggregate(self.dbm, oyster_id, result)

        self.logger.info({
            "event": "oyster_recalculated",
            "oyster_id": oyster_id,
            "name": oyster.name,
            "total_reviews": result.total_reviews,
            "overall_score": result.overall_score,
        })
        return result

    async def recalculate_all(self) -> BatchReport:
        """Recalculate every oyster; one failure does not stop the rest."""
        oyster_ids = await list_oyster_ids(self.dbm)
        self.logger.info({"event": "recalculate_all_start", "oysters": len(oyster_ids)})

        report = BatchReport()
        for oyster_id in oyster_ids:
            try:
                report.results[oyster_id] = await self.recalculate_oyster(oyster_id)
            except Exception as e:
                self.logger.warning({
                    "event": "oyster_recalculate_failed",
                    "oyster_id": oyster_id,
                    "error": str(e),
                })
                report.failed.append(oyster_id)

        self.logger.info({
            "event": "recalculate_all_complete",
            "succeeded": report.succeeded,
            "failed": report.failed,
        })
        return report

    async def on_review_changed(self, oyster_id: str) -> AggregateResult:
        """Hook for review create, update and delete."""
        return await self.recalculate_oyster(oyster_id)

    async def on_vote_changed(
        self,
        review_id: str,
        agree_count: int,
        disagree_count: int,
    ) -> AggregateResult:
        """Store new vote tallies on a review, then recalculate its oyster.

        Raises:
            NotFoundError: If the review does not exist
        """
        net, weight = review_quality_weight(agree_count, disagree_count, self.params)
        oyster_id = await set_review_votes(
            self.dbm,
            review_id,
            agree_count=agree_count,
            disagree_count=disagree_count,
            net_vote_score=float(net),
            weighted_score=float(weight),
        )
        if oyster_id is None:
            raise NotFoundError(f"review not found: {review_id}")

        self.logger.debug({
            "event": "review_weight_updated",
            "review_id": review_id,
            "weighted_score": float(weight),
        })
        return await self.recalculate_oyster(oyster_id)

    async def get_rating_stats(self, oyster_id: str) -> RatingStats:
        """Verdict breakdown and seed/community split for one oyster."""
        loaded = await load_oyster_reviews(self.dbm, oyster_id)
        if loaded is None:
            raise NotFoundError(f"oyster not found: {oyster_id}")
        oyster, reviews = loaded
        return rating_stats(oyster, reviews, self.params)


__all__ = ["RatingService"]
