"""Sequential recomputation over many oysters with partial-failure semantics."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Tuple

from oysterscore.config.rating_params import RatingParams, get_rating_params

from .aggregate import recompute
from .types import BatchReport, OysterInput, ReviewInput

logger = logging.getLogger(__name__)

BatchEntry = Tuple[str, Optional[OysterInput], Sequence[ReviewInput]]


def recompute_many(
    entries: Iterable[BatchEntry],
    params: RatingParams | None = None,
) -> BatchReport:
    """Recompute each (oyster_id, oyster, reviews) entry in order.

    A failure on one oyster is logged with its identifier and recorded in
    the report; the remaining oysters are still processed. Never raises for
    per-oyster errors.
    """
    params = params or get_rating_params()
    report = BatchReport()

    for oyster_id, oyster, reviews in entries:
        try:
            report.results[oyster_id] = recompute(oyster, reviews, params)
        except Exception as e:
            logger.warning({
                "event": "recompute_failed",
                "oyster_id": oyster_id,
                "error": str(e),
            })
            report.failed.append(oyster_id)

    logger.info({
        "event": "recompute_batch_complete",
        "succeeded": report.succeeded,
        "failed": len(report.failed),
    })
    return report


__all__ = ["BatchEntry", "recompute_many"]
