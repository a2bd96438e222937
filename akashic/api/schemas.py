"""Pydantic request/response schemas for the Akashic ingestion API.

Request schemas end with "Request", response schemas end with "Response".
Invalid request bodies are rejected by FastAPI with a 422 before any
handler runs.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

from akashic.models.ingestion import GraphDbType, IngestionTarget
from akashic.models.job import JobStatus


class TextIngestRequest(BaseModel):
    """Raw text submitted for ingestion."""

    text: str = Field(..., min_length=1)
    target: IngestionTarget = IngestionTarget.VECTOR
    graph_db: GraphDbType | None = None
    metadata: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _graph_db_required_for_graph(self) -> TextIngestRequest:
        if self.target.includes_graph and self.graph_db is None:
            msg = f"graph_db is required when target is '{self.target.value}'"
            raise ValueError(msg)
        return self


class IngestResponse(BaseModel):
    """Returned when a job has been queued."""

    document_id: int
    status: JobStatus
    message: str


class StatusResponse(BaseModel):
    """Current state of an ingestion job."""

    document_id: int
    filename: str | None = None
    status: JobStatus
    progress: int = Field(ge=0, le=100)
    error_message: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
