from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from receipt_documents.api.routes import router as documents_router
from receipt_documents.config.settings import Settings
from receipt_documents.database.connection import close_pool, init_pool
from receipt_documents.database.repositories.categories_repository import CategoriesRepository
from receipt_documents.database.repositories.expense_documents_repository import (
    ExpenseDocumentsRepository,
)
from receipt_documents.documents.service import DocumentService
from receipt_documents.extraction.factory import ExtractorFactory
from receipt_documents.logging.logger import Log
from receipt_documents.storage.factory import ObjectStoreFactory


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API: object store and services are created once per process."""
    settings = settings or Settings()
    Log.configure(settings.log_level)

    store = ObjectStoreFactory.create(settings)
    documents_repo = ExpenseDocumentsRepository()
    categories_repo = CategoriesRepository()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        init_pool(settings)
        try:
            yield
        finally:
            close_pool()

    app = FastAPI(title="Receipt Documents API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.document_service = DocumentService(
        store=store,
        documents_repo=documents_repo,
        max_file_size=settings.s3_max_file_size,
    )
    app.state.receipt_extractor = ExtractorFactory.create(
        settings,
        store=store,
        documents_repo=documents_repo,
        categories_repo=categories_repo,
    )
    app.include_router(documents_router)

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    Log.info(
        f"App created - environment: {settings.app_env}, "
        f"documents {'enabled' if store is not None else 'disabled'}"
    )
    return app


def main() -> None:
    """Entry point: load settings -> build app -> serve."""
    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.http_host, port=settings.http_port)


if __name__ == "__main__":
    main()
