"""Application lifespan: startup and shutdown.

Only wiring of infrastructure (logging, document store, telemetry);
no business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from potracker.core.config import get_settings
from potracker.infrastructure.store_factory import DocumentStoreFactory
from potracker.shared.telemetry import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, document store, telemetry (if enabled).
    Shutdown order: document store close, telemetry shutdown.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    app.state.document_store = DocumentStoreFactory.create_document_store(settings)
    if app.state.document_store is None:
        logger.error(
            "Document store unavailable (backend=%s); search endpoints will return 503",
            settings.database_backend,
        )

    app.state.telemetry = None
    if settings.telemetry_enabled:
        from potracker.shared.telemetry.telemetry import TelemetryConfig

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        telemetry.instrument_fastapi(app)
        telemetry.instrument_logging()
        app.state.telemetry = telemetry
        logger.info("Telemetry initialized")

    yield

    # ---- Shutdown ----
    store = getattr(app.state, "document_store", None)
    if store is not None:
        await store.aclose()
        app.state.document_store = None
        logger.info("Document store closed")

    telemetry_instance = getattr(app.state, "telemetry", None)
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        logger.info("Telemetry shutdown complete")
