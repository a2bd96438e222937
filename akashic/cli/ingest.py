"""Command-line driver for Akashic ingestion.

Usage::

    python -m akashic.cli ingest --file /path/to/book.pdf --target both --graph-db neo4j

    cat notes.txt | python -m akashic.cli ingest --stdin --metadata '{"source": "notes"}'

    python -m akashic.cli status 42

``ingest`` creates the job record, runs the worker in-process and prints
progress as the pipeline advances.  Exit code is 0 on success and 1 on
failure.  Backend connection details come from :class:`Settings`
(environment variables / ``.env``).
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from akashic.config.settings import Settings
from akashic.interfaces.job_record_provider import IJobRecordProvider
from akashic.models.ingestion import GraphDbType, IngestionTarget
from akashic.models.job import JobRecord
from akashic.pipeline.progress_tracker import JobProgressTracker
from akashic.providers.jobs.sqlite_job_record_provider import SQLiteJobRecordProvider
from akashic.utils.errors import AkashicError
from akashic.utils.logging import configure_logging
from akashic.workers.ingest import IngestJobArgs, perform

_STDIN_FILENAME = "stdin"


def _print_progress(record: JobRecord) -> None:
    print(f"  [{record.progress:>3}%] {record.status.value}")


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


async def _handle_ingest(
    args: argparse.Namespace,
    app_settings: Settings,
    job_records: IJobRecordProvider,
) -> int:
    """Create a job record and run the ingestion worker on it."""
    target = IngestionTarget(args.target)
    graph_db = GraphDbType(args.graph_db) if args.graph_db else None
    metadata: dict[str, Any] | None = args.metadata

    if args.stdin:
        text: str | None = sys.stdin.read()
        file_path = None
        filename = _STDIN_FILENAME
    else:
        text = None
        file_path = args.file
        filename = Path(args.file).name

    await job_records.initialize()
    record = await job_records.create(filename, target, graph_db=graph_db, metadata=metadata)
    print(f"Created document record with ID: {record.id}")

    tracker = JobProgressTracker(job_records)
    tracker.register_listener(record.id, _print_progress)

    job_args = IngestJobArgs(
        document_id=record.id,
        file_path=file_path,
        text=text,
        target=target,
        graph_db=graph_db,
        metadata=metadata,
    )
    try:
        await perform(job_args, app_settings, job_records, tracker=tracker)
    except (AkashicError, asyncio.TimeoutError) as exc:
        print(f"✗ Ingestion failed: {exc}", file=sys.stderr)
        return 1

    print(f"✓ Ingestion completed successfully for document {record.id}")
    return 0


async def _handle_status(args: argparse.Namespace, job_records: IJobRecordProvider) -> int:
    """Print the stored state of one job."""
    await job_records.initialize()
    record = await job_records.find(args.document_id)
    if record is None:
        print(f"Error: document {args.document_id} not found", file=sys.stderr)
        return 1

    print(f"Document {record.id}")
    print(f"  Filename: {record.filename}")
    print(f"  Status:   {record.status.value}")
    print(f"  Progress: {record.progress}%")
    print(f"  Target:   {record.ingestion_type.value}")
    if record.graph_db is not None:
        print(f"  Graph DB: {record.graph_db.value}")
    if record.error_message:
        print(f"  Error:    {record.error_message}")
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _metadata_arg(value: str) -> dict[str, Any]:
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise argparse.ArgumentTypeError("metadata must be a JSON object")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ingestion CLI."""
    parser = argparse.ArgumentParser(
        prog="python -m akashic.cli",
        description="Ingest documents into Akashic vector and graph stores.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # -- ingest --
    ingest_parser = subparsers.add_parser("ingest", help="Ingest a file or stdin text")
    source = ingest_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--file", "-f", help="Path to the file to ingest")
    source.add_argument("--stdin", action="store_true", help="Read text from stdin")
    ingest_parser.add_argument(
        "--target",
        "-t",
        choices=[t.value for t in IngestionTarget],
        default=IngestionTarget.VECTOR.value,
        help="Store category to write to (default: vector)",
    )
    ingest_parser.add_argument(
        "--graph-db",
        "-g",
        dest="graph_db",
        choices=[g.value for g in GraphDbType],
        help="Graph backend (required for --target graph/both)",
    )
    ingest_parser.add_argument(
        "--metadata",
        type=_metadata_arg,
        help="JSON object attached to every stored chunk/node",
    )

    # -- status --
    status_parser = subparsers.add_parser("status", help="Show a job's status")
    status_parser.add_argument("document_id", type=int, help="Document / job ID")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.  Exits the process with the handler's exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if (
        args.command == "ingest"
        and IngestionTarget(args.target).includes_graph
        and args.graph_db is None
    ):
        parser.error("--graph-db is required when --target is graph or both")

    app_settings = Settings()
    configure_logging(log_level=app_settings.log_level)
    job_records = SQLiteJobRecordProvider(app_settings.job_db_path)

    if args.command == "ingest":
        exit_code = asyncio.run(_handle_ingest(args, app_settings, job_records))
    else:
        exit_code = asyncio.run(_handle_status(args, job_records))

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
