"""
Paper "service layer".

Each function runs the checks for one operation, then talks to the store.
Checks always run before any storage access. Failures are raised as
`errors.PaperError` subclasses and mapped to HTTP responses in `errors.py`.
"""

from __future__ import annotations

import logging
from typing import Any

from . import validation
from .errors import InvalidIdError, InvalidQueryError, PaperNotFoundError, PaperValidationError
from .repository import PaperRepository

logger = logging.getLogger(__name__)


def _parse_id(raw_id: str) -> int:
    if not validation.validate_identifier(raw_id):
        raise InvalidIdError()
    return int(raw_id)


def _parse_payload(payload: Any) -> validation.PaperFields:
    errors = validation.validate_payload(payload)
    if errors:
        raise PaperValidationError(errors)
    return validation.normalize_payload(payload)


async def create_paper(store: PaperRepository, payload: Any) -> dict[str, Any]:
    fields = _parse_payload(payload)
    paper = await store.create(fields)
    logger.info("paper_created id=%s", paper["id"])
    return paper


async def list_papers(
    store: PaperRepository,
    *,
    year: str | None = None,
    published_in: str | None = None,
    limit: str | None = None,
    offset: str | None = None,
) -> list[dict[str, Any]]:
    """
    Return one page of papers.

    An empty page is reported as not found rather than `[]`; clients of the
    original API rely on that.
    """
    if not validation.validate_list_query(year, limit, offset):
        raise InvalidQueryError()

    query = validation.parse_list_query(year, published_in, limit, offset)
    papers = await store.list(
        year=query.year,
        published_in=query.published_in,
        limit=query.limit,
        offset=query.offset,
    )
    if not papers:
        raise PaperNotFoundError()
    return papers


async def get_paper(store: PaperRepository, raw_id: str) -> dict[str, Any]:
    paper_id = _parse_id(raw_id)
    paper = await store.get_by_id(paper_id)
    if paper is None:
        raise PaperNotFoundError(paper_id)
    return paper


async def update_paper(store: PaperRepository, raw_id: str, payload: Any) -> dict[str, Any]:
    paper_id = _parse_id(raw_id)
    fields = _parse_payload(payload)

    paper = await store.update(paper_id, fields)
    if paper is None:
        raise PaperNotFoundError(paper_id)
    logger.info("paper_updated id=%s", paper_id)
    return paper


async def delete_paper(store: PaperRepository, raw_id: str) -> None:
    paper_id = _parse_id(raw_id)
    if not await store.delete(paper_id):
        raise PaperNotFoundError(paper_id)
    logger.info("paper_deleted id=%s", paper_id)
