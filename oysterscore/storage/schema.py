"""SQLAlchemy tables for oysters, reviews and reviewers."""

from __future__ import annotations

import datetime as dt
import uuid
from typing import List

from sqlalchemy import (
    DateTime,
    Enum as SAEnum,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from oysterscore.scoring.types import Verdict


# Shared metadata so create_all sees every table
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}
metadata = MetaData(naming_convention=naming_convention)


class Base(DeclarativeBase):
    metadata = metadata


verdict_enum = SAEnum(Verdict, name="review_rating", metadata=metadata)


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), comment="Display name")
    credibility_score: Mapped[float] = mapped_column(
        Float,
        default=1.0,
        comment="Reviewer credibility multiplier, nominally 0.5-1.5",
    )
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    reviews: Mapped[List["Review"]] = relationship(back_populates="user")


class Oyster(Base):
    __tablename__ = "oysters"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), unique=True)
    species: Mapped[str] = mapped_column(String(255), default="")
    origin: Mapped[str] = mapped_column(String(255), default="")
    standout_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Curator seed values (1-10), read-only for the aggregation engine
    size: Mapped[int] = mapped_column(Integer, default=5)
    body: Mapped[int] = mapped_column(Integer, default=5)
    sweet_brininess: Mapped[int] = mapped_column(Integer, default=5)
    flavorfulness: Mapped[int] = mapped_column(Integer, default=5)
    creaminess: Mapped[int] = mapped_column(Integer, default=5)

    # Aggregates, rewritten together on every recalculation
    total_reviews: Mapped[int] = mapped_column(Integer, default=0)
    avg_rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    avg_size: Mapped[float | None] = mapped_column(Float, nullable=True)
    avg_body: Mapped[float | None] = mapped_column(Float, nullable=True)
    avg_sweet_brininess: Mapped[float | None] = mapped_column(Float, nullable=True)
    avg_flavorfulness: Mapped[float | None] = mapped_column(Float, nullable=True)
    avg_creaminess: Mapped[float | None] = mapped_column(Float, nullable=True)
    overall_score: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
    )

    reviews: Mapped[List["Review"]] = relationship(
        back_populates="oyster",
        cascade="all, delete-orphan",
    )


class Review(Base):
    __tablename__ = "reviews"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    oyster_id: Mapped[str] = mapped_column(ForeignKey("oysters.id", ondelete="CASCADE"))
    rating: Mapped[Verdict] = mapped_column(verdict_enum)

    size: Mapped[int | None] = mapped_column(Integer, nullable=True)
    body: Mapped[int | None] = mapped_column(Integer, nullable=True)
    sweet_brininess: Mapped[int | None] = mapped_column(Integer, nullable=True)
    flavorfulness: Mapped[int | None] = mapped_column(Integer, nullable=True)
    creaminess: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    agree_count: Mapped[int] = mapped_column(Integer, default=0)
    disagree_count: Mapped[int] = mapped_column(Integer, default=0)
    net_vote_score: Mapped[float] = mapped_column(Float, default=0.0)
    weighted_score: Mapped[float] = mapped_column(
        Float,
        default=1.0,
        comment="Vote-derived quality weight, nominally 0.4-1.5",
    )
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    user: Mapped["User"] = relationship(back_populates="reviews")
    oyster: Mapped["Oyster"] = relationship(back_populates="reviews")

    __table_args__ = (
        UniqueConstraint("user_id", "oyster_id", name="uq_reviews_user_oyster"),
        Index("ix_reviews_oyster_id", "oyster_id"),
    )


__all__ = [
    "Base",
    "metadata",
    "verdict_enum",
    "User",
    "Oyster",
    "Review",
]
