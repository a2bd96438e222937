"""Akashic domain models — re-exports all public model classes.

    - ingestion.py — target selector and graph backend discriminator
    - job.py       — job record and its lifecycle states
"""

from __future__ import annotations

from akashic.models.ingestion import GraphDbType, IngestionTarget
from akashic.models.job import JobRecord, JobStatus

__all__ = [
    "GraphDbType",
    "IngestionTarget",
    "JobRecord",
    "JobStatus",
]
