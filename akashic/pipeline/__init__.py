"""Ingestion pipeline: orchestrator and job progress tracker."""

from akashic.pipeline.orchestrator import IngestionPipeline
from akashic.pipeline.progress_tracker import JobProgressTracker

__all__ = ["IngestionPipeline", "JobProgressTracker"]
