"""Recalculate stored oyster aggregates.

Usage:
    oysterscore-recalculate                      # every oyster
    oysterscore-recalculate --oyster-id <id>     # one oyster
    oysterscore-recalculate --config config.yaml --database-url sqlite+aiosqlite:///o.db

Useful for backfills and after changing rating parameters. Exits with
status 1 when any oyster failed.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from oysterscore.config import Settings, load_settings
from oysterscore.scoring.types import ScoringError
from oysterscore.shared.logging import setup_logging
from oysterscore.storage import DBM, RatingService

logger = logging.getLogger("oysterscore.recalculate")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Recalculate oyster rating aggregates")
    parser.add_argument("--config", type=str, default=None, help="YAML settings file")
    parser.add_argument("--database-url", type=str, default=None, help="Async SQLAlchemy URL")
    parser.add_argument("--oyster-id", type=str, default=None, help="Only recalculate this oyster")
    parser.add_argument("--log-level", type=str, default=None)
    return parser


async def run(settings: Settings, oyster_id: Optional[str] = None) -> int:
    dbm = DBM(settings.database.url, echo=settings.database.echo)
    try:
        await dbm.initialize()
        service = RatingService(dbm, params=settings.rating, logger=logger)

        if oyster_id:
            try:
                result = await service.recalculate_oyster(oyster_id)
            except (ScoringError, SQLAlchemyError) as e:
                logger.error({"event": "recalculate_failed", "oyster_id": oyster_id, "error": str(e)})
                return 1
            print(f"{oyster_id}: {result.total_reviews} reviews, overall {result.overall_score:.2f}")
            return 0

        report = await service.recalculate_all()
        print(f"Recalculated {report.succeeded} oysters, {len(report.failed)} failed")
        for failed_id in report.failed:
            print(f"  failed: {failed_id}")
        return 0 if report.ok else 1
    finally:
        await dbm.dispose()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.config)
    if args.database_url:
        settings.database.url = args.database_url
    if args.log_level:
        settings.logging.level = args.log_level

    setup_logging(
        settings.logging.level,
        log_dir=settings.logging.log_dir,
        retention_bytes=settings.logging.retention_bytes,
    )
    return asyncio.run(run(settings, oyster_id=args.oyster_id))


if __name__ == "__main__":
    sys.exit(main())
