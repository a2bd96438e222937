"""Shared pytest fixtures for the Akashic test suite."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from akashic.config.settings import Settings
from akashic.interfaces.graph_store_provider import IGraphStoreProvider
from akashic.interfaces.ocr_provider import IOCRProvider
from akashic.interfaces.vector_store_provider import IVectorStoreProvider
from akashic.providers.jobs.sqlite_job_record_provider import SQLiteJobRecordProvider

# ---------------------------------------------------------------------------
# Job store
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def job_records(tmp_path: Path) -> SQLiteJobRecordProvider:
    """An initialised SQLite job store in a temp directory."""
    provider = SQLiteJobRecordProvider(db_path=tmp_path / "jobs.db")
    await provider.initialize()
    return provider


# ---------------------------------------------------------------------------
# Mock providers
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_vector_store() -> MagicMock:
    """Return a mock IVectorStoreProvider whose ingest succeeds."""
    store = MagicMock(spec=IVectorStoreProvider)
    store.ingest = AsyncMock(return_value=None)
    store.aclose = AsyncMock(return_value=None)
    store.get_provider_name.return_value = "mock-vector"
    return store


@pytest.fixture
def mock_graph_store() -> MagicMock:
    """Return a mock IGraphStoreProvider whose ingest succeeds."""
    store = MagicMock(spec=IGraphStoreProvider)
    store.ingest = AsyncMock(return_value=None)
    store.aclose = AsyncMock(return_value=None)
    store.get_provider_name.return_value = "mock-graph"
    return store


@pytest.fixture
def mock_ocr() -> MagicMock:
    """Return a mock IOCRProvider that recognises a fixed string."""
    ocr = MagicMock(spec=IOCRProvider)
    ocr.extract_text = AsyncMock(return_value="ocr text")
    ocr.get_provider_name.return_value = "tesseract"
    return ocr


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings with no vector store and a temp job database."""
    return Settings(
        chroma_url="",
        job_db_path=str(tmp_path / "akashic.db"),
        graphiti_enabled=False,
        ingest_timeout_seconds=0,
    )
