"""Ingestion pipeline orchestrator.

Runs one ingestion job end to end: pick an extractor for the file, pull the
text out, fan it out to the configured stores in a fixed order, and record
status/progress checkpoints on the job record as it goes.

Checkpoints written by :meth:`IngestionPipeline.process_file`::

    processing/0 → extract → processing/30 → vector → (both: processing/60)
                 → graph → processing/80 → completed/100

:meth:`IngestionPipeline.process_text` skips extraction and writes
processing/10 then completed/100.

Failures propagate to the caller unchanged.  The orchestrator never records
them on its own; the driver calls :meth:`IngestionPipeline.handle_error`
with ``str(exc)``.  Stores that are not configured are skipped, so a
``graph`` run without a graph store still completes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

from akashic.interfaces.graph_store_provider import IGraphStoreProvider
from akashic.interfaces.job_record_provider import IJobRecordProvider
from akashic.interfaces.vector_store_provider import IVectorStoreProvider
from akashic.models.ingestion import GraphDbType, IngestionTarget
from akashic.pipeline.progress_tracker import JobProgressTracker
from akashic.providers.graph_store.factory import create_graph_store
from akashic.providers.vector_store.chromadb_http_provider import ChromaDBHTTPProvider
from akashic.services.extractor_registry import ExtractorRegistry
from akashic.utils.errors import ExtractorNotFoundError
from akashic.utils.logging import get_logger

_PROGRESS_STARTED = 0
_PROGRESS_TEXT_STARTED = 10
_PROGRESS_EXTRACTED = 30
_PROGRESS_VECTOR_DONE = 60
_PROGRESS_STORED = 80


class IngestionPipeline:
    """Orchestrates extraction and store fan-out for ingestion jobs.

    All collaborators are injected.  ``vector_store`` and ``graph_store``
    may be ``None``; runs targeting a missing store skip it.

    Parameters
    ----------
    job_records:
        Job store the tracker reads and writes.
    vector_store:
        Optional vector store.
    graph_store:
        Optional graph store.
    registry:
        Extractor registry; defaults to :meth:`ExtractorRegistry.default`.
    tracker:
        Progress tracker; defaults to a new one over *job_records*.
    """

    def __init__(
        self,
        job_records: IJobRecordProvider,
        vector_store: IVectorStoreProvider | None = None,
        graph_store: IGraphStoreProvider | None = None,
        registry: ExtractorRegistry | None = None,
        tracker: JobProgressTracker | None = None,
    ) -> None:
        self._job_records = job_records
        self._vector_store = vector_store
        self._graph_store = graph_store
        self._registry = registry or ExtractorRegistry.default()
        self._tracker = tracker or JobProgressTracker(job_records)
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @classmethod
    async def create(
        cls,
        job_records: IJobRecordProvider,
        chroma_url: str | None = None,
        graph_db: GraphDbType | None = None,
        graph_config: dict[str, Any] | None = None,
        collection_name: str = "akashic",
        enable_graphiti: bool = False,
        registry: ExtractorRegistry | None = None,
        tracker: JobProgressTracker | None = None,
    ) -> IngestionPipeline:
        """Build a pipeline with connected stores.

        The vector store is built only when *chroma_url* is non-empty and
        the graph store only when *graph_db* is given.

        Raises
        ------
        akashic.utils.errors.ConfigurationError
            If the graph configuration is incomplete or Graphiti is disabled.
        akashic.utils.errors.GraphStoreError
            If the graph backend cannot be reached.
        """
        vector_store: ChromaDBHTTPProvider | None = None
        if chroma_url:
            vector_store = ChromaDBHTTPProvider(chroma_url, collection_name)
            await vector_store.initialize()

        graph_store: IGraphStoreProvider | None = None
        if graph_db is not None:
            try:
                graph_store = await create_graph_store(
                    graph_db, graph_config or {}, enable_graphiti=enable_graphiti
                )
            except Exception:
                if vector_store is not None:
                    await vector_store.aclose()
                raise

        return cls(
            job_records,
            vector_store=vector_store,
            graph_store=graph_store,
            registry=registry,
            tracker=tracker,
        )

    @property
    def tracker(self) -> JobProgressTracker:
        return self._tracker

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    async def process_file(
        self,
        job_id: int,
        file_path: str | Path,
        target: IngestionTarget,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Extract *file_path* and ingest its text into the *target* stores.

        Raises
        ------
        ExtractorNotFoundError
            If no extractor supports the file's extension.
        akashic.utils.errors.ExtractionError
            If the extractor (and its OCR fallback, where one exists) fails.
        akashic.utils.errors.StoreError
            If a store rejects the write.
        """
        target = IngestionTarget(target)
        self._logger.info(
            "ingest_file_start", job_id=job_id, file_path=str(file_path), target=target.value
        )
        await self._tracker.update(job_id, _PROGRESS_STARTED)

        extractor = self._registry.resolve(file_path)
        if extractor is None:
            raise ExtractorNotFoundError(
                f"No extractor found for file: {Path(file_path).name}"
            )

        text = await extractor.extract(file_path)
        self._logger.info(
            "text_extracted", job_id=job_id, extractor=extractor.get_name(), chars=len(text)
        )
        await self._tracker.update(job_id, _PROGRESS_EXTRACTED)

        await self._fan_out(job_id, text, target, metadata, checkpoints=True)

        await self._tracker.complete(job_id)
        self._logger.info("ingest_file_complete", job_id=job_id)

    async def process_text(
        self,
        job_id: int,
        text: str,
        target: IngestionTarget,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Ingest raw *text* into the *target* stores."""
        target = IngestionTarget(target)
        self._logger.info(
            "ingest_text_start", job_id=job_id, chars=len(text), target=target.value
        )
        await self._tracker.update(job_id, _PROGRESS_TEXT_STARTED)

        await self._fan_out(job_id, text, target, metadata, checkpoints=False)

        await self._tracker.complete(job_id)
        self._logger.info("ingest_text_complete", job_id=job_id)

    async def handle_error(self, job_id: int, message: str) -> None:
        """Record a failed run: status ``failed`` with *message*."""
        await self._tracker.fail(job_id, message)

    async def aclose(self) -> None:
        """Close the store connections owned by this pipeline."""
        if self._vector_store is not None:
            await self._vector_store.aclose()
        if self._graph_store is not None:
            await self._graph_store.aclose()

    # ------------------------------------------------------------------
    # Fan-out
    # ------------------------------------------------------------------

    async def _fan_out(
        self,
        job_id: int,
        text: str,
        target: IngestionTarget,
        metadata: dict[str, Any] | None,
        checkpoints: bool,
    ) -> None:
        # Sequential: a vector failure aborts before the graph store is called.
        document_id = str(job_id)

        if target.includes_vector:
            if self._vector_store is not None:
                await self._vector_store.ingest(document_id, text, metadata)
                self._logger.info(
                    "vector_ingest_complete",
                    job_id=job_id,
                    store=self._vector_store.get_provider_name(),
                )
            else:
                self._logger.info("vector_store_not_configured", job_id=job_id)
            if target == IngestionTarget.BOTH and checkpoints:
                await self._tracker.update(job_id, _PROGRESS_VECTOR_DONE)

        if target.includes_graph:
            if self._graph_store is not None:
                await self._graph_store.ingest(document_id, text, metadata)
                self._logger.info(
                    "graph_ingest_complete",
                    job_id=job_id,
                    store=self._graph_store.get_provider_name(),
                )
            else:
                self._logger.info("graph_store_not_configured", job_id=job_id)

        if checkpoints:
            await self._tracker.update(job_id, _PROGRESS_STORED)
