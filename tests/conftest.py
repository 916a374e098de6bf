"""
Shared fixtures.

API tests run against `create_app()` with the paper store dependency replaced
by an in-memory store exposing the same async methods as `PaperRepository`.
Repository tests that need PostgreSQL use `TEST_DATABASE_URL` and are skipped
when it is not set.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from main import create_app
from papers.dependencies import get_paper_store
from papers.repository import format_timestamp
from papers.validation import PaperFields

SAMPLE_PAPER = {
    "title": "Sample Paper Title",
    "authors": "John Doe, Jane Smith",
    "published_in": "ICSE 2024",
    "year": 2024,
}


class SteppingClock:
    """Returns a time one second later on every call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 5, 1, 12, 0, 0, 123000, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


class InMemoryPaperStore:
    def __init__(self, clock: SteppingClock | None = None) -> None:
        self._clock = clock or SteppingClock()
        self._rows: dict[int, dict[str, Any]] = {}
        self._next_id = 1

    async def create(self, fields: PaperFields) -> dict[str, Any]:
        stamp = format_timestamp(self._clock())
        row = {
            "id": self._next_id,
            "title": fields.title,
            "authors": fields.authors,
            "published_in": fields.published_in,
            "year": fields.year,
            "created_at": stamp,
            "updated_at": stamp,
        }
        self._rows[self._next_id] = row
        self._next_id += 1
        return dict(row)

    async def get_by_id(self, paper_id: int) -> dict[str, Any] | None:
        row = self._rows.get(paper_id)
        return dict(row) if row is not None else None

    async def list(
        self,
        *,
        year: int | None = None,
        published_in: str | None = None,
        limit: int,
        offset: int,
    ) -> list[dict[str, Any]]:
        rows = [self._rows[k] for k in sorted(self._rows)]
        if year is not None:
            rows = [r for r in rows if r["year"] == year]
        if published_in:
            rows = [r for r in rows if published_in.lower() in r["published_in"].lower()]
        return [dict(r) for r in rows[offset : offset + limit]]

    async def update(self, paper_id: int, fields: PaperFields) -> dict[str, Any] | None:
        row = self._rows.get(paper_id)
        if row is None:
            return None
        row.update(
            title=fields.title,
            authors=fields.authors,
            published_in=fields.published_in,
            year=fields.year,
            updated_at=format_timestamp(self._clock()),
        )
        return dict(row)

    async def delete(self, paper_id: int) -> bool:
        return self._rows.pop(paper_id, None) is not None


@pytest.fixture
def store() -> InMemoryPaperStore:
    return InMemoryPaperStore()


@pytest.fixture
def test_app(store: InMemoryPaperStore, monkeypatch: pytest.MonkeyPatch) -> FastAPI:
    monkeypatch.delenv("API_PREFIX", raising=False)
    app = create_app()
    app.dependency_overrides[get_paper_store] = lambda: store
    return app


@pytest_asyncio.fixture
async def client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
