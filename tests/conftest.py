"""Shared fixtures: a throwaway SQLite database and helpers to populate it."""

from __future__ import annotations

import asyncio

import pytest
import pytest_asyncio
from sqlalchemy import select, text

from oysterscore.scoring.types import Verdict
from oysterscore.storage import DBM, build_sqlite_url
from oysterscore.storage.schema import Oyster, Review, User


class Seeder:
    """Inserts oysters, reviewers and reviews through the ORM."""

    def __init__(self, dbm: DBM):
        self.dbm = dbm
        self._users = 0

    async def add_oyster(self, name: str = "Kumamoto", **seeds) -> str:
        async with self.dbm.session() as session:
            async with session.begin():
                oyster = Oyster(name=name, species="Crassostrea sikamea", origin="Humboldt Bay", **seeds)
                session.add(oyster)
            return oyster.id

    async def add_user(self, credibility: float = 1.0) -> str:
        self._users += 1
        async with self.dbm.session() as session:
            async with session.begin():
                user = User(name=f"reviewer-{self._users}", credibility_score=credibility)
                session.add(user)
            return user.id

    async def add_review(
        self,
        oyster_id: str,
        rating: Verdict = Verdict.LIKE_IT,
        *,
        credibility: float = 1.0,
        **fields,
    ) -> str:
        user_id = await self.add_user(credibility)
        async with self.dbm.session() as session:
            async with session.begin():
                review = Review(user_id=user_id, oyster_id=oyster_id, rating=rating, **fields)
                session.add(review)
            return review.id

    async def corrupt_rating(self, review_id: str, raw: str = "BROKEN") -> None:
        """Store a rating label the application does not know."""
        await self.dbm.write(
            text("UPDATE reviews SET rating = :raw WHERE id = :id"),
            {"raw": raw, "id": review_id},
        )

    async def oyster_row(self, oyster_id: str):
        rows = await self.dbm.read(select(Oyster.__table__).where(Oyster.id == oyster_id))
        return rows[0]

    async def review_row(self, review_id: str):
        rows = await self.dbm.read(select(Review.__table__).where(Review.id == review_id))
        return rows[0]


@pytest_asyncio.fixture
async def dbm(tmp_path):
    """Initialized database manager on a fresh SQLite file."""
    manager = DBM(build_sqlite_url(str(tmp_path / "oysters.db")))
    await manager.initialize()
    yield manager
    await manager.dispose()


@pytest.fixture
def seeder(dbm) -> Seeder:
    return Seeder(dbm)


@pytest.fixture
def seeded_db(tmp_path):
    """A SQLite file with two healthy oysters and one with a corrupt review.

    Returns (url, ids) where ids maps "plain", "reviewed" and "broken" to
    oyster ids. For synchronous tests that drive their own event loop.
    """
    url = build_sqlite_url(str(tmp_path / "cli.db"))

    async def populate():
        manager = DBM(url)
        await manager.initialize()
        seed = Seeder(manager)
        ids = {
            "plain": await seed.add_oyster("Blue Pool"),
            "reviewed": await seed.add_oyster("Kusshi"),
            "broken": await seed.add_oyster("Shigoku"),
        }
        for _ in range(5):
            await seed.add_review(ids["reviewed"], Verdict.LOVE_IT, size=8)
        bad = await seed.add_review(ids["broken"], Verdict.MEH)
        await seed.corrupt_rating(bad)
        await manager.dispose()
        return ids

    return url, asyncio.run(populate())
