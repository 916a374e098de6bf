"""
Paper API endpoints.

Path, query and body values are taken raw so `validation.py` (not FastAPI's
coercion) decides what is acceptable.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response, status

from . import service
from .dependencies import get_paper_store
from .repository import PaperRepository
from .schemas import PaperResponse

router = APIRouter()


@router.get("/papers", response_model=list[PaperResponse])
async def list_papers(
    year: str | None = Query(default=None),
    published_in: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    offset: str | None = Query(default=None),
    store: PaperRepository = Depends(get_paper_store),
) -> list[dict[str, Any]]:
    return await service.list_papers(
        store,
        year=year,
        published_in=published_in,
        limit=limit,
        offset=offset,
    )


@router.get("/papers/{paper_id}", response_model=PaperResponse)
async def get_paper(
    paper_id: str,
    store: PaperRepository = Depends(get_paper_store),
) -> dict[str, Any]:
    return await service.get_paper(store, paper_id)


@router.post("/papers", response_model=PaperResponse, status_code=status.HTTP_201_CREATED)
async def create_paper(
    payload: Any = Body(default=None),
    store: PaperRepository = Depends(get_paper_store),
) -> dict[str, Any]:
    return await service.create_paper(store, payload)


@router.put("/papers/{paper_id}", response_model=PaperResponse)
async def update_paper(
    paper_id: str,
    payload: Any = Body(default=None),
    store: PaperRepository = Depends(get_paper_store),
) -> dict[str, Any]:
    return await service.update_paper(store, paper_id, payload)


@router.delete("/papers/{paper_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_paper(
    paper_id: str,
    store: PaperRepository = Depends(get_paper_store),
) -> Response:
    await service.delete_paper(store, paper_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
