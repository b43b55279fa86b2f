from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

from app.config import get_app_settings


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    logging.basicConfig(
        level=get_app_settings().log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Stop any in-flight crawl when the process shuts down."""
    logging.getLogger(__name__).info("Crawler API started")
    try:
        yield
    finally:
        from app.services.crawl_service import get_crawl_service

        if get_crawl_service.cache_info().currsize:
            service = get_crawl_service()
            if service.cancel():
                service.orchestrator.wait(timeout=10.0)
        logging.getLogger(__name__).info("Crawler API shut down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _configure_logging()
    settings = get_app_settings()

    application = FastAPI(
        title=settings.title,
        version=settings.version,
        lifespan=_lifespan,
    )

    from app.api.routers import crawl_router

    application.include_router(crawl_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
