"""Abstract base class for job-record persistence.

The job record is the externally visible state of one ingestion request.
Drivers create it; the pipeline reads and updates it.  The default backend
is a local SQLite database, but anything that can store a row per job
satisfies this contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from akashic.models.ingestion import GraphDbType, IngestionTarget
from akashic.models.job import JobRecord


# Concrete implementation: SQLiteJobRecordProvider (akashic/providers/jobs/)
class IJobRecordProvider(ABC):
    """Contract for job-record stores.  All operations are async."""

    @abstractmethod
    async def initialize(self) -> None:
        """Create the backing schema if it does not exist yet."""

    @abstractmethod
    async def create(
        self,
        filename: str | None,
        ingestion_type: IngestionTarget,
        graph_db: GraphDbType | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> JobRecord:
        """Insert a new job in the ``queued`` state with progress 0.

        Returns
        -------
        JobRecord
            The stored record, including its newly assigned ``id``.
        """

    @abstractmethod
    async def find(self, job_id: int) -> JobRecord | None:
        """Return the job with *job_id*, or ``None`` if it does not exist."""

    @abstractmethod
    async def update(self, job_id: int, **fields: Any) -> JobRecord:
        """Overwrite the given *fields* on the job and return the new record.

        Accepted fields are ``status``, ``progress`` and ``error_message``.

        Raises
        ------
        akashic.utils.errors.JobNotFoundError
            If *job_id* does not exist.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"sqlite"``."""
