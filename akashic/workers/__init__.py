"""Background job workers."""

from akashic.workers.ingest import IngestJobArgs, perform

__all__ = ["IngestJobArgs", "perform"]
