"""FastAPI route definitions for the Akashic ingestion API.

Endpoints
---------
POST /api/ingest/text          Queue raw text for ingestion.
GET  /api/ingest/status/{id}   Poll a job's status and progress.

Ingestion runs as a FastAPI background task after the response has been
sent; clients poll the status endpoint.  Settings and the job store are
resolved from ``app.state`` (populated in ``main.create_app``).
"""

from __future__ import annotations

import asyncio
from typing import Annotated

import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, Request

from akashic.api.schemas import (
    ErrorResponse,
    IngestResponse,
    StatusResponse,
    TextIngestRequest,
)
from akashic.config.settings import Settings
from akashic.interfaces.job_record_provider import IJobRecordProvider
from akashic.utils.errors import AkashicError, JobNotFoundError
from akashic.utils.logging import get_logger
from akashic.workers.ingest import IngestJobArgs, perform

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api/ingest")

_TEXT_INPUT_FILENAME = "text_input"


# ---------------------------------------------------------------------------
# Dependency injection helpers: resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _get_job_records(request: Request) -> IJobRecordProvider:
    return request.app.state.job_records


SettingsDep = Annotated[Settings, Depends(_get_settings)]
JobRecordsDep = Annotated[IJobRecordProvider, Depends(_get_job_records)]


async def _run_ingest_job(
    args: IngestJobArgs,
    settings: Settings,
    job_records: IJobRecordProvider,
) -> None:
    """Background task body.  The worker has already recorded any failure."""
    try:
        await perform(args, settings, job_records)
    except (AkashicError, asyncio.TimeoutError) as exc:
        _logger.warning("background_ingest_failed", job_id=args.document_id, error=str(exc))


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post(
    "/text",
    response_model=IngestResponse,
    summary="Queue raw text for ingestion",
)
async def ingest_text(
    body: TextIngestRequest,
    background_tasks: BackgroundTasks,
    settings: SettingsDep,
    job_records: JobRecordsDep,
) -> IngestResponse:
    record = await job_records.create(
        _TEXT_INPUT_FILENAME,
        body.target,
        graph_db=body.graph_db,
        metadata=body.metadata,
    )

    background_tasks.add_task(
        _run_ingest_job,
        IngestJobArgs(
            document_id=record.id,
            text=body.text,
            target=body.target,
            graph_db=body.graph_db,
            metadata=body.metadata,
        ),
        settings,
        job_records,
    )

    _logger.info("text_ingest_queued", job_id=record.id, target=body.target.value)
    return IngestResponse(
        document_id=record.id,
        status=record.status,
        message="Text queued for ingestion",
    )


@router.get(
    "/status/{document_id}",
    response_model=StatusResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get ingestion job status",
)
async def get_status(document_id: int, job_records: JobRecordsDep) -> StatusResponse:
    record = await job_records.find(document_id)
    if record is None:
        raise JobNotFoundError(f"Document {document_id} not found")

    return StatusResponse(
        document_id=record.id,
        filename=record.filename,
        status=record.status,
        progress=record.progress,
        error_message=record.error_message,
    )
