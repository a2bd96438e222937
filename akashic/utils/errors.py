"""Custom exception hierarchy for Akashic.

All application exceptions inherit from :class:`AkashicError`, which
carries an optional ``provider_name`` so error handlers can identify which
external component (e.g. "tesseract", "chromadb", "neo4j") caused the failure.

The hierarchy follows the failure taxonomy of an ingestion run:

    AkashicError  (base -- catch-all for any Akashic error)
    +-- ExtractorNotFoundError  (no extractor matches the file extension)
    +-- ExtractionError         (read / parse failure)
    |   +-- OCRExtractionError  (external OCR tool failure)
    +-- StoreError              (backend rejected the write)
    |   +-- VectorStoreError
    |   +-- GraphStoreError
    +-- ConfigurationError      (missing backend configuration)
    +-- JobNotFoundError        (job record does not exist)
    +-- PipelineError           (illegal job state transition)

Every failure is terminal for the current run.  The driver turns the
exception into the job's ``error_message`` via ``str(exc)``.
"""


class AkashicError(Exception):
    """Base exception for all Akashic errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external component triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets,
    e.g. ``[chromadb] ChromaDB request failed: ...``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Extraction errors
# ---------------------------------------------------------------------------

class ExtractorNotFoundError(AkashicError):
    """Raised when no registered extractor supports a file's extension."""

    def __init__(
        self,
        message: str = "No extractor found for this file type",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ExtractionError(AkashicError):
    """Raised when reading or parsing a source file fails."""

    def __init__(
        self,
        message: str = "Failed to extract text from file",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class OCRExtractionError(ExtractionError):
    """Raised when the OCR fallback tool fails (missing, non-zero exit, bad output)."""

    def __init__(
        self,
        message: str = "OCR text extraction failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Store errors
# ---------------------------------------------------------------------------

class StoreError(AkashicError):
    """Raised when a storage backend rejects a write."""

    def __init__(
        self,
        message: str = "Store ingestion failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class VectorStoreError(StoreError):
    """Raised when the vector store rejects a batch of chunks."""

    def __init__(
        self,
        message: str = "Vector store ingestion failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class GraphStoreError(StoreError):
    """Raised when a graph database write or connection fails."""

    def __init__(
        self,
        message: str = "Graph store ingestion failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Orchestration / configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(AkashicError):
    """Raised when backend configuration is invalid or missing at construction."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class JobNotFoundError(AkashicError):
    """Raised when a job record id does not exist in the job store."""

    def __init__(
        self,
        message: str = "Document not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class PipelineError(AkashicError):
    """Raised when a job transition is illegal (terminal state left, progress regressed)."""

    def __init__(
        self,
        message: str = "Pipeline orchestration failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
