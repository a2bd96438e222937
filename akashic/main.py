"""FastAPI application entry point for Akashic.

Builds the application, wires the job-record store and settings into
``app.state`` and exposes the ingestion router.  Run with::

    python -m akashic.main
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from akashic import __version__
from akashic.api.middleware import ErrorHandlingMiddleware, RequestLoggingMiddleware
from akashic.api.routes import router as api_router
from akashic.config.settings import Settings
from akashic.interfaces.job_record_provider import IJobRecordProvider
from akashic.providers.jobs.sqlite_job_record_provider import SQLiteJobRecordProvider
from akashic.utils.logging import configure_logging, get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    job_records: IJobRecordProvider | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application.

    Parameters
    ----------
    settings:
        Application settings; read from the environment when omitted.
    job_records:
        Job store; defaults to SQLite at ``settings.job_db_path``.
    """
    settings = settings or Settings()
    job_records = job_records or SQLiteJobRecordProvider(settings.job_db_path)

    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        """Initialise the job store on startup."""
        application.state.settings = settings
        application.state.job_records = job_records
        await job_records.initialize()
        _logger.info(
            "app_startup",
            version=__version__,
            environment=settings.app_env,
            job_store=job_records.get_provider_name(),
            vector_store_configured=bool(settings.chroma_url),
        )
        yield
        _logger.info("app_shutdown")

    application = FastAPI(
        title="Akashic API",
        version=__version__,
        description="Queue documents for ingestion into vector and graph stores.",
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)

    application.include_router(api_router)

    @application.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    return application


if __name__ == "__main__":
    _settings = Settings()
    configure_logging(
        log_level=_settings.log_level,
        json_output=(_settings.app_env == "production"),
    )
    uvicorn.run(
        create_app(_settings),
        host=_settings.app_host,
        port=_settings.app_port,
    )
