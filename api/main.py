from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import settings
from core.db import Database
from core.logging_config import log_requests, setup_logging
from papers import router as papers_router
from papers.errors import register_error_handlers
from papers.repository import PaperRepository


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pool per process; the store is built from it and injected into routes.
    db = Database.from_env()
    await db.connect()
    try:
        store = PaperRepository(db)
        await store.ensure_schema()
        app.state.paper_store = store
        yield
    finally:
        await db.close()


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(title="paper-management-api", lifespan=lifespan)

    # Allow local frontend dev server to call this API from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    register_error_handlers(app)
    app.include_router(papers_router.router, prefix=settings.api_prefix(), tags=["papers"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "paper-management api"}

    return app


app = create_app()
