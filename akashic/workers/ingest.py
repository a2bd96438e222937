"""Ingestion job worker.

The worker is the glue between a queued job record and the pipeline.  It
reads backend settings, builds an :class:`IngestionPipeline` with the stores
the job needs, runs it under the configured timeout and turns any failure
into a ``failed`` job record before re-raising.

Drivers (API background task, CLI) call :func:`perform` once per job.
"""

from __future__ import annotations

import asyncio
from typing import Any

from pydantic import BaseModel, model_validator

from akashic.config.settings import Settings
from akashic.interfaces.job_record_provider import IJobRecordProvider
from akashic.models.ingestion import GraphDbType, IngestionTarget
from akashic.pipeline.orchestrator import IngestionPipeline
from akashic.pipeline.progress_tracker import JobProgressTracker
from akashic.providers.ocr.tesseract_cli_provider import TesseractCLIProvider
from akashic.services.extractor_registry import ExtractorRegistry
from akashic.utils.logging import get_logger

logger = get_logger(__name__)


class IngestJobArgs(BaseModel):
    """Arguments for one ingestion job.  Exactly one of ``file_path`` / ``text``."""

    document_id: int
    file_path: str | None = None
    text: str | None = None
    target: IngestionTarget = IngestionTarget.VECTOR
    graph_db: GraphDbType | None = None
    metadata: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _one_source(self) -> IngestJobArgs:
        if (self.file_path is None) == (self.text is None):
            msg = "Exactly one of file_path or text must be provided"
            raise ValueError(msg)
        return self


async def _build_pipeline(
    args: IngestJobArgs,
    settings: Settings,
    job_records: IJobRecordProvider,
    tracker: JobProgressTracker,
) -> IngestionPipeline:
    graph_db = args.graph_db if args.target.includes_graph else None
    return await IngestionPipeline.create(
        job_records,
        chroma_url=settings.chroma_url if args.target.includes_vector else None,
        graph_db=graph_db,
        graph_config=settings.graph_config(graph_db) if graph_db else None,
        collection_name=settings.chroma_collection,
        enable_graphiti=settings.graphiti_enabled,
        registry=ExtractorRegistry.default(TesseractCLIProvider(settings.tesseract_cmd)),
        tracker=tracker,
    )


async def perform(
    args: IngestJobArgs,
    settings: Settings,
    job_records: IJobRecordProvider,
    tracker: JobProgressTracker | None = None,
) -> None:
    """Run one ingestion job to completion.

    Parameters
    ----------
    args:
        Job identity, source and target selection.
    settings:
        Backend connection settings.
    job_records:
        Store holding the job record created by the driver.
    tracker:
        Optional tracker; pass one with listeners registered to observe
        progress.

    Raises
    ------
    akashic.utils.errors.AkashicError
        Whatever the pipeline raised.  The job record is marked ``failed``
        with ``str(exc)`` before the exception leaves this function.
    TimeoutError
        If the run exceeds ``settings.ingest_timeout_seconds``.
    """
    tracker = tracker or JobProgressTracker(job_records)
    job_id = args.document_id

    metadata = args.metadata
    if metadata is None:
        record = await job_records.find(job_id)
        metadata = record.metadata if record is not None else None

    try:
        pipeline = await _build_pipeline(args, settings, job_records, tracker)
    except Exception as exc:
        logger.error("pipeline_build_failed", job_id=job_id, error=str(exc))
        await tracker.fail(job_id, str(exc))
        raise

    if args.file_path is not None:
        run = pipeline.process_file(job_id, args.file_path, args.target, metadata)
    else:
        run = pipeline.process_text(job_id, args.text or "", args.target, metadata)

    timeout = settings.ingest_timeout_seconds or None
    try:
        await asyncio.wait_for(run, timeout=timeout)
    except asyncio.TimeoutError:
        message = f"Ingestion timed out after {settings.ingest_timeout_seconds}s"
        logger.error("ingest_job_timeout", job_id=job_id, timeout=timeout)
        await pipeline.handle_error(job_id, message)
        raise
    except Exception as exc:
        logger.error(
            "ingest_job_failed",
            job_id=job_id,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        await pipeline.handle_error(job_id, str(exc))
        raise
    finally:
        await pipeline.aclose()

    logger.info("ingest_job_complete", job_id=job_id)
