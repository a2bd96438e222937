"""Job-record persistence adapters."""

from akashic.providers.jobs.sqlite_job_record_provider import SQLiteJobRecordProvider

__all__ = ["SQLiteJobRecordProvider"]
