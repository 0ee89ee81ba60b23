# anjia_properties/api/app.py

"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from anjia_properties.api.routes import router
from anjia_properties.services.resolution_pipeline import ResolutionPipeline

logger = logging.getLogger("anjia.api")


def create_app(pipeline: ResolutionPipeline | None = None) -> FastAPI:
    """Build the API around one shared :class:`ResolutionPipeline`.

    A pipeline passed in (tests, embedding) is used as is; otherwise one
    is built from :class:`Settings`.  Source sessions are closed on
    shutdown either way.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("API starting")
        try:
            yield
        finally:
            await app.state.pipeline.close()
            logger.info("API shut down")

    app = FastAPI(
        title="An Jia Properties data API",
        version="1.0.0",
        description="Property listings and details resolved across CMS, "
        "static and fallback sources.",
        lifespan=lifespan,
    )
    app.state.pipeline = pipeline or ResolutionPipeline()
    app.include_router(router)
    return app
