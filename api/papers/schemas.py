"""
Pydantic schemas for paper responses.

Request bodies are read as raw JSON and checked by `validation.py`, so there
is no request model here.
"""

from __future__ import annotations

from pydantic import BaseModel


class PaperResponse(BaseModel):
    id: int
    title: str
    authors: str
    published_in: str
    year: int
    created_at: str
    updated_at: str
