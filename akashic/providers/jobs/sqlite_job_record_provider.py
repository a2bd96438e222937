"""SQLite-backed job-record provider.

Persists ingestion job state to a local SQLite database at
``data/akashic.db``.  Uses ``aiosqlite`` for async I/O.  Metadata is stored
as a JSON text column.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import aiosqlite
import structlog

from akashic.interfaces.job_record_provider import IJobRecordProvider
from akashic.models.ingestion import GraphDbType, IngestionTarget
from akashic.models.job import JobRecord, JobStatus
from akashic.utils.errors import JobNotFoundError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/akashic.db")

_CREATE_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS documents (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    filename        TEXT,
    status          TEXT    NOT NULL DEFAULT 'queued',
    ingestion_type  TEXT    NOT NULL,
    graph_db        TEXT,
    progress        INTEGER NOT NULL DEFAULT 0,
    metadata        TEXT,
    error_message   TEXT,
    created_at      TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    updated_at      TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);
"""

_CREATE_INDICES_SQL = [
    "CREATE INDEX IF NOT EXISTS idx_documents_status ON documents(status);",
]

_INSERT_SQL = """\
INSERT INTO documents (filename, ingestion_type, graph_db, metadata)
VALUES (?, ?, ?, ?);
"""

_SELECT_SQL = """\
SELECT id, filename, status, ingestion_type, graph_db, progress, metadata,
       error_message, created_at, updated_at
FROM documents
WHERE id = ?;
"""

_UPDATABLE_FIELDS = frozenset({"status", "progress", "error_message"})


def _row_to_record(row: aiosqlite.Row) -> JobRecord:
    data = dict(row)
    data["metadata"] = json.loads(data["metadata"]) if data["metadata"] else None
    return JobRecord(**data)


class SQLiteJobRecordProvider(IJobRecordProvider):
    """SQLite-backed job-record persistence."""

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    async def initialize(self) -> None:
        """Create the documents table and indices if they don't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiosqlite.connect(str(self._db_path)) as db:
            await db.execute(_CREATE_TABLE_SQL)
            for idx_sql in _CREATE_INDICES_SQL:
                await db.execute(idx_sql)
            await db.commit()
        logger.info("job_db_initialized", path=str(self._db_path))

    async def create(
        self,
        filename: str | None,
        ingestion_type: IngestionTarget,
        graph_db: GraphDbType | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> JobRecord:
        async with aiosqlite.connect(str(self._db_path)) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                _INSERT_SQL,
                (
                    filename,
                    IngestionTarget(ingestion_type).value,
                    GraphDbType(graph_db).value if graph_db else None,
                    json.dumps(metadata) if metadata is not None else None,
                ),
            )
            job_id = cursor.lastrowid
            await db.commit()
            cursor = await db.execute(_SELECT_SQL, (job_id,))
            row = await cursor.fetchone()

        record = _row_to_record(row)
        logger.info(
            "job_created",
            job_id=record.id,
            filename=filename,
            ingestion_type=record.ingestion_type.value,
        )
        return record

    async def find(self, job_id: int) -> JobRecord | None:
        async with aiosqlite.connect(str(self._db_path)) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(_SELECT_SQL, (job_id,))
            row = await cursor.fetchone()
        return _row_to_record(row) if row is not None else None

    async def update(self, job_id: int, **fields: Any) -> JobRecord:
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            msg = f"Cannot update job fields: {', '.join(sorted(unknown))}"
            raise ValueError(msg)
        if not fields:
            record = await self.find(job_id)
            if record is None:
                raise JobNotFoundError(f"Document {job_id} not found")
            return record

        values: dict[str, Any] = dict(fields)
        if isinstance(values.get("status"), JobStatus):
            values["status"] = values["status"].value

        assignments = ", ".join(f"{name} = ?" for name in values)
        sql = (
            f"UPDATE documents SET {assignments}, "
            "updated_at = strftime('%Y-%m-%dT%H:%M:%fZ', 'now') WHERE id = ?"
        )

        async with aiosqlite.connect(str(self._db_path)) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(sql, (*values.values(), job_id))
            if cursor.rowcount == 0:
                raise JobNotFoundError(f"Document {job_id} not found")
            await db.commit()
            cursor = await db.execute(_SELECT_SQL, (job_id,))
            row = await cursor.fetchone()

        return _row_to_record(row)

    def get_provider_name(self) -> str:
        return "sqlite"
