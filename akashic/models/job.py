"""Job record models for the Akashic ingestion pipeline.

A job record is the persisted state of one ingestion request.  It is created
by a driver (API handler, CLI, worker) in the ``queued`` state and is
exclusively advanced by the pipeline orchestrator afterwards:

    queued → processing (progress ↑) → completed | failed

Records are frozen; the job store returns a fresh instance after every
update.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from akashic.models.ingestion import GraphDbType, IngestionTarget


class JobStatus(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """Lifecycle states of an ingestion job."""

    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


# Ordering used to reject backward transitions (e.g. processing → queued).
STATUS_ORDER: dict[JobStatus, int] = {
    JobStatus.QUEUED: 0,
    JobStatus.PROCESSING: 1,
    JobStatus.COMPLETED: 2,
    JobStatus.FAILED: 2,
}


class JobRecord(BaseModel):
    """Persisted state of one ingestion attempt."""

    model_config = ConfigDict(frozen=True)

    id: int
    # Display name of the source file, or a marker such as "text_input".
    filename: str | None = None
    status: JobStatus = JobStatus.QUEUED
    ingestion_type: IngestionTarget
    graph_db: GraphDbType | None = None
    progress: int = Field(default=0, ge=0, le=100)
    # Free-form payload attached verbatim to stored chunks and nodes.
    metadata: dict[str, Any] | None = None
    error_message: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
