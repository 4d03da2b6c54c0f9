"""FastAPI application setup."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lead_enricher.config import settings
from lead_enricher.services import EnrichmentServices, open_services
from .routes import router

VERSION = "1.0.0"

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    services_factory: Optional[Callable[[], EnrichmentServices]] = None,
) -> FastAPI:
    """Create the API app; services are opened in the lifespan."""
    factory = services_factory or open_services

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.services = factory()
        try:
            yield
        finally:
            await app.state.services.close()
            logger.info("Enrichment services closed")

    app = FastAPI(
        title="Lead Enricher",
        description="Enrich business leads with emails, founders, industry and scores",
        version=VERSION,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": datetime.utcnow().isoformat(),
            "version": VERSION,
        }

    app.include_router(router, prefix="/api")
    return app


app = create_app()
