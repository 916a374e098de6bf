"""
Paper persistence (raw SQL).

`PaperRepository` is the only thing that touches the `papers` table. Each
operation is a single statement, so it is atomic on its own.

Timestamps leave this module as ISO-8601 UTC strings with millisecond
precision (`2024-05-01T12:30:00.123Z`). Values are truncated to milliseconds
before they are written, so what `create` returns is exactly what a later
`get_by_id` returns.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

from core.db import Database

from .validation import MAX_YEAR, PaperFields

# Largest value a BIGINT (id, LIMIT, OFFSET) can hold.
BIGINT_MAX = 2**63 - 1

PAPER_COLUMNS = "id, title, authors, published_in, year, created_at, updated_at"

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS papers (
  id BIGSERIAL PRIMARY KEY,
  title TEXT NOT NULL,
  authors TEXT NOT NULL,
  published_in TEXT NOT NULL,
  year INTEGER NOT NULL CHECK (year > 1900),
  created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
  updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""


def utc_now() -> datetime:
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond - now.microsecond % 1000)


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def like_pattern(fragment: str) -> str:
    """
    Build an ILIKE pattern matching `fragment` as a literal substring.
    """
    escaped = fragment.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _to_record(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": int(row["id"]),
        "title": row["title"],
        "authors": row["authors"],
        "published_in": row["published_in"],
        "year": int(row["year"]),
        "created_at": format_timestamp(row["created_at"]),
        "updated_at": format_timestamp(row["updated_at"]),
    }


class PaperRepository:
    def __init__(self, db: Database, *, clock: Callable[[], datetime] = utc_now) -> None:
        self._db = db
        self._clock = clock

    async def ensure_schema(self) -> None:
        await self._db.execute(CREATE_TABLE_SQL)

    async def create(self, fields: PaperFields) -> dict[str, Any]:
        now = self._clock()
        row = await self._db.fetch_one(
            f"""
            INSERT INTO papers (title, authors, published_in, year, created_at, updated_at)
            VALUES ($1, $2, $3, $4, $5, $5)
            RETURNING {PAPER_COLUMNS}
            """,
            fields.title,
            fields.authors,
            fields.published_in,
            fields.year,
            now,
        )
        if row is None:
            raise RuntimeError("Failed to insert paper.")
        return _to_record(row)

    async def get_by_id(self, paper_id: int) -> dict[str, Any] | None:
        if paper_id > BIGINT_MAX:
            return None
        row = await self._db.fetch_one(
            f"""
            SELECT {PAPER_COLUMNS}
            FROM papers
            WHERE id = $1
            """,
            paper_id,
        )
        return _to_record(row) if row is not None else None

    async def list(
        self,
        *,
        year: int | None = None,
        published_in: str | None = None,
        limit: int,
        offset: int,
    ) -> list[dict[str, Any]]:
        """
        Page through papers in insertion order, optionally filtered by exact
        year and case-insensitive venue substring.
        """
        # No stored row can match a year beyond the column's range.
        if year is not None and year > MAX_YEAR:
            return []

        conditions: list[str] = []
        params: list[Any] = []

        if year is not None:
            params.append(year)
            conditions.append(f"year = ${len(params)}")
        if published_in:
            params.append(like_pattern(published_in))
            conditions.append(f"published_in ILIKE ${len(params)} ESCAPE '\\'")

        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        params.extend([limit, min(offset, BIGINT_MAX)])

        rows = await self._db.fetch_all(
            f"""
            SELECT {PAPER_COLUMNS}
            FROM papers
            {where}
            ORDER BY id
            LIMIT ${len(params) - 1}
            OFFSET ${len(params)}
            """,
            *params,
        )
        return [_to_record(r) for r in rows]

    async def update(self, paper_id: int, fields: PaperFields) -> dict[str, Any] | None:
        """
        Overwrite the business fields of an existing paper.
        Returns None (and writes nothing) when the paper does not exist.
        """
        if paper_id > BIGINT_MAX:
            return None
        row = await self._db.fetch_one(
            f"""
            UPDATE papers
            SET title = $2,
                authors = $3,
                published_in = $4,
                year = $5,
                updated_at = GREATEST(created_at, $6)
            WHERE id = $1
            RETURNING {PAPER_COLUMNS}
            """,
            paper_id,
            fields.title,
            fields.authors,
            fields.published_in,
            fields.year,
            self._clock(),
        )
        return _to_record(row) if row is not None else None

    async def delete(self, paper_id: int) -> bool:
        if paper_id > BIGINT_MAX:
            return False
        row = await self._db.fetch_one(
            """
            DELETE FROM papers
            WHERE id = $1
            RETURNING id
            """,
            paper_id,
        )
        return row is not None
