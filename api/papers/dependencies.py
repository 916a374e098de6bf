"""
Paper store dependency for FastAPI routes.
"""

from __future__ import annotations

from fastapi import Request

from .repository import PaperRepository


def get_paper_store(request: Request) -> PaperRepository:
    store = getattr(request.app.state, "paper_store", None)
    if store is None:
        raise RuntimeError("Paper store is not initialized. It is created in the app lifespan.")
    return store
