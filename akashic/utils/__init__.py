"""Utility modules for Akashic.

- **errors** -- Domain exception hierarchy rooted at AkashicError; each
  failure class of an ingestion run (selection, extraction, store,
  configuration) raises its own subclass.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from akashic.utils.errors import (
    AkashicError,
    ConfigurationError,
    ExtractionError,
    ExtractorNotFoundError,
    GraphStoreError,
    JobNotFoundError,
    OCRExtractionError,
    PipelineError,
    StoreError,
    VectorStoreError,
)
from akashic.utils.logging import configure_logging, get_logger

__all__ = [
    "AkashicError",
    "ConfigurationError",
    "ExtractionError",
    "ExtractorNotFoundError",
    "GraphStoreError",
    "JobNotFoundError",
    "OCRExtractionError",
    "PipelineError",
    "StoreError",
    "VectorStoreError",
    "configure_logging",
    "get_logger",
]
