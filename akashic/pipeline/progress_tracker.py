"""Job progress tracking with listener notification.

The tracker is the only writer of ``status``, ``progress`` and
``error_message`` on a job record during a run.  Every write goes through
the job store and is checked first:

- a job in a terminal state (``completed`` / ``failed``) never changes again,
- status never moves backwards (``processing`` → ``queued``),
- progress never decreases.

After each accepted write the tracker broadcasts the new record to the
listeners registered for that job id (Observer pattern).  The CLI uses a
listener to print progress lines; anything else that wants live updates
can do the same.

# Listener errors are caught and logged so a faulty listener never aborts
# the ingestion run.  Both sync and async callbacks are supported
# (asyncio.iscoroutine check).
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import structlog

from akashic.interfaces.job_record_provider import IJobRecordProvider
from akashic.models.job import STATUS_ORDER, JobRecord, JobStatus
from akashic.utils.errors import JobNotFoundError, PipelineError
from akashic.utils.logging import get_logger


class JobProgressTracker:
    """Validates and persists job transitions, then notifies listeners.

    Listeners are callables accepting a single :class:`JobRecord`.
    """

    def __init__(self, job_records: IJobRecordProvider) -> None:
        self._job_records = job_records
        # Per-job list of listener callbacks (Observer pattern)
        self._listeners: dict[int, list[Callable]] = {}
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def update(
        self,
        job_id: int,
        progress: int,
        status: JobStatus = JobStatus.PROCESSING,
    ) -> JobRecord:
        """Move the job to *status* at *progress* percent.

        Raises
        ------
        JobNotFoundError
            If the job does not exist.
        PipelineError
            If the job is terminal, the status would move backwards, or
            progress would decrease.
        """
        current = await self._load(job_id)
        if current.status.is_terminal:
            raise PipelineError(
                f"Job {job_id} is already {current.status.value}; "
                f"cannot move to {status.value}"
            )
        if STATUS_ORDER[status] < STATUS_ORDER[current.status]:
            raise PipelineError(
                f"Job {job_id} cannot go from {current.status.value} to {status.value}"
            )
        if progress < current.progress:
            raise PipelineError(
                f"Job {job_id} progress cannot decrease from "
                f"{current.progress} to {progress}"
            )

        record = await self._job_records.update(job_id, status=status, progress=progress)
        self._logger.debug(
            "job_progress_update",
            job_id=job_id,
            status=status.value,
            progress=progress,
        )
        await self._notify_listeners(record)
        return record

    async def complete(self, job_id: int) -> JobRecord:
        """Mark the job ``completed`` at 100%."""
        return await self.update(job_id, 100, JobStatus.COMPLETED)

    async def fail(self, job_id: int, message: str) -> JobRecord:
        """Mark the job ``failed`` with *message*, leaving progress unchanged.

        Failing a job that already failed keeps the first message.

        Raises
        ------
        PipelineError
            If the job has already completed.
        """
        current = await self._load(job_id)
        if current.status == JobStatus.FAILED:
            self._logger.warning(
                "job_already_failed",
                job_id=job_id,
                kept_error=current.error_message,
                ignored_error=message,
            )
            return current
        if current.status == JobStatus.COMPLETED:
            raise PipelineError(f"Job {job_id} already completed; cannot mark failed")

        record = await self._job_records.update(
            job_id, status=JobStatus.FAILED, error_message=message
        )
        self._logger.info("job_failed", job_id=job_id, error=message)
        await self._notify_listeners(record)
        return record

    def register_listener(self, job_id: int, callback: Callable) -> None:
        """Register *callback* to receive every accepted transition of *job_id*."""
        if job_id not in self._listeners:
            self._listeners[job_id] = []

        if callback not in self._listeners[job_id]:
            self._listeners[job_id].append(callback)

    def unregister_listener(self, job_id: int, callback: Callable) -> None:
        listeners = self._listeners.get(job_id, [])
        if callback in listeners:
            listeners.remove(callback)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _load(self, job_id: int) -> JobRecord:
        record = await self._job_records.find(job_id)
        if record is None:
            raise JobNotFoundError(f"Document {job_id} not found")
        return record

    async def _notify_listeners(self, record: JobRecord) -> None:
        for callback in self._listeners.get(record.id, []):
            try:
                result = callback(record)
                if asyncio.iscoroutine(result):
                    await result
            except Exception as exc:
                self._logger.warning(
                    "listener_callback_error",
                    job_id=record.id,
                    error=str(exc),
                    callback=getattr(callback, "__name__", repr(callback)),
                )
