"""End-to-end ingestion: real extractors, real job store, HTTP-mocked Chroma
and a fake FalkorDB client.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from akashic.models.ingestion import IngestionTarget
from akashic.models.job import JobRecord, JobStatus
from akashic.pipeline.orchestrator import IngestionPipeline
from akashic.pipeline.progress_tracker import JobProgressTracker
from akashic.providers.graph_store.falkordb_provider import FalkorDBGraphStoreProvider
from akashic.providers.jobs.sqlite_job_record_provider import SQLiteJobRecordProvider
from akashic.providers.vector_store.chromadb_http_provider import ChromaDBHTTPProvider
from akashic.utils.errors import VectorStoreError


def _chroma(requests: list[httpx.Request], status: int = 200) -> ChromaDBHTTPProvider:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status, text="{}" if status < 400 else "server exploded")

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ChromaDBHTTPProvider("http://chroma.test", http_client=client)


def _falkor() -> tuple[FalkorDBGraphStoreProvider, MagicMock]:
    redis_client = MagicMock()
    redis_client.execute_command = AsyncMock(return_value=[])
    redis_client.aclose = AsyncMock()
    return FalkorDBGraphStoreProvider("redis://kb", client=redis_client), redis_client


class TestIngestionFlow:
    @pytest.mark.asyncio
    async def test_markdown_file_to_both_stores(
        self, tmp_path: Path, job_records: SQLiteJobRecordProvider
    ) -> None:
        path = tmp_path / "History.MD"
        path.write_text("# Acid House\n\nIt's 1988.\n\n\n\nThe end.", encoding="utf-8")
        record = await job_records.create(path.name, IngestionTarget.BOTH, "falkordb")

        requests: list[httpx.Request] = []
        vector_store = _chroma(requests)
        graph_store, redis_client = _falkor()
        tracker = JobProgressTracker(job_records)
        progress: list[int] = []

        def _on_progress(job: JobRecord) -> None:
            progress.append(job.progress)

        tracker.register_listener(record.id, _on_progress)
        pipeline = IngestionPipeline(
            job_records, vector_store=vector_store, graph_store=graph_store, tracker=tracker
        )

        await pipeline.process_file(record.id, path, IngestionTarget.BOTH, {"era": "80s"})
        await pipeline.aclose()

        assert progress == [0, 30, 60, 80, 100]

        payload = json.loads(requests[0].content)
        doc_id = str(record.id)
        assert payload["ids"] == [f"{doc_id}_0", f"{doc_id}_1", f"{doc_id}_2"]
        assert payload["documents"] == ["# Acid House", "It's 1988.", "The end."]
        assert all(m["era"] == "80s" for m in payload["metadatas"])

        _, graph, query = redis_client.execute_command.await_args.args
        assert graph == "akashic"
        assert "It\\'s 1988." in query
        assert f"id: '{doc_id}'" in query

        final = await job_records.find(record.id)
        assert (final.status, final.progress) == (JobStatus.COMPLETED, 100)

    @pytest.mark.asyncio
    async def test_vector_rejection_leaves_graph_untouched(
        self, job_records: SQLiteJobRecordProvider
    ) -> None:
        record = await job_records.create("text_input", IngestionTarget.BOTH, "falkordb")
        graph_store, redis_client = _falkor()
        pipeline = IngestionPipeline(
            job_records, vector_store=_chroma([], status=500), graph_store=graph_store
        )

        with pytest.raises(VectorStoreError) as exc_info:
            await pipeline.process_text(record.id, "alpha\n\nbeta", IngestionTarget.BOTH)
        await pipeline.handle_error(record.id, str(exc_info.value))

        redis_client.execute_command.assert_not_awaited()
        final = await job_records.find(record.id)
        assert final.status == JobStatus.FAILED
        assert final.progress == 10
        assert final.error_message == "[chromadb] ChromaDB request failed: server exploded"
