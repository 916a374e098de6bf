"""
Input validation for paper endpoints.

One strictness policy for every entry point:
- body fields are checked by type, never coerced (`"2024"` is not a year)
- path and query values arrive as raw strings and must be plain ASCII digits
  (no sign, no decimal point, no ranges like `15-20`)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

MIN_YEAR_EXCLUSIVE = 1900
# Upper bound of the INTEGER `year` column.
MAX_YEAR = 2**31 - 1
MIN_LIMIT = 1
MAX_LIMIT = 100
DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0

TITLE_REQUIRED = "Title is required"
AUTHORS_REQUIRED = "Authors are required"
VENUE_REQUIRED = "Published venue is required"
YEAR_REQUIRED = "Published year is required"
YEAR_INVALID = "Valid year after 1900 is required"

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class PaperFields:
    title: str
    authors: str
    published_in: str
    year: int


@dataclass(frozen=True)
class ListQuery:
    year: int | None
    published_in: str | None
    limit: int
    offset: int


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _is_int(value: Any) -> bool:
    # bool is a subclass of int; JSON `true` is not a year.
    return isinstance(value, int) and not isinstance(value, bool)


def _is_digits(raw: Any) -> bool:
    return isinstance(raw, str) and _DIGITS.fullmatch(raw) is not None


def _is_present(raw: str | None) -> bool:
    return raw is not None and raw != ""


def validate_payload(candidate: Any) -> list[str]:
    """
    Return every violation in `candidate`, in a fixed order. Empty means valid.
    """
    if not isinstance(candidate, dict):
        candidate = {}

    errors: list[str] = []
    if _is_blank(candidate.get("title")):
        errors.append(TITLE_REQUIRED)
    if _is_blank(candidate.get("authors")):
        errors.append(AUTHORS_REQUIRED)
    if _is_blank(candidate.get("published_in")):
        errors.append(VENUE_REQUIRED)

    year = candidate.get("year")
    if year is None:
        errors.append(YEAR_REQUIRED)
    elif not _is_int(year) or not MIN_YEAR_EXCLUSIVE < year <= MAX_YEAR:
        errors.append(YEAR_INVALID)

    return errors


def normalize_payload(candidate: dict[str, Any]) -> PaperFields:
    """
    Pick the four business fields out of an already validated payload.
    """
    return PaperFields(
        title=candidate["title"],
        authors=candidate["authors"],
        published_in=candidate["published_in"],
        year=candidate["year"],
    )


def validate_identifier(raw: Any) -> bool:
    return _is_digits(raw) and int(raw) > 0


def validate_list_query(year: str | None, limit: str | None, offset: str | None) -> bool:
    if _is_present(year):
        if not _is_digits(year) or int(year) <= MIN_YEAR_EXCLUSIVE:
            return False
    if _is_present(limit):
        if not _is_digits(limit) or not MIN_LIMIT <= int(limit) <= MAX_LIMIT:
            return False
    if _is_present(offset):
        if not _is_digits(offset):
            return False
    return True


def parse_list_query(
    year: str | None,
    published_in: str | None,
    limit: str | None,
    offset: str | None,
) -> ListQuery:
    """
    Turn raw query strings (already checked by validate_list_query) into filters.
    """
    return ListQuery(
        year=int(year) if _is_present(year) else None,
        published_in=published_in or None,
        limit=int(limit) if _is_present(limit) else DEFAULT_LIMIT,
        offset=int(offset) if _is_present(offset) else DEFAULT_OFFSET,
    )
