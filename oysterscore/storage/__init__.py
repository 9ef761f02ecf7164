"""
Storage for oysters and reviews.

This package is the caller side of the aggregation engine: it loads an
oyster with its reviews, hands them to the engine, and writes the
resulting aggregate back as one record.
"""
from .dbm import DBM, build_sqlite_url
from .service import RatingService

__all__ = ["DBM", "build_sqlite_url", "RatingService"]
