"""Abstract base class for vector-store backends.

A vector store receives the extracted text of a document, splits it into
chunks and indexes them for semantic search.  Implementations own their
chunking policy; the pipeline only hands over the whole text.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


# Concrete implementation: ChromaDBHTTPProvider (akashic/providers/vector_store/)
class IVectorStoreProvider(ABC):
    """Contract for vector-store services used by the ingestion pipeline."""

    @abstractmethod
    async def ingest(
        self,
        document_id: str,
        text: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Chunk *text* and store the chunks under *document_id*.

        Parameters
        ----------
        document_id:
            Stable identifier of the source document.  Chunk ids are
            derived from it.
        text:
            Full extracted text of the document.
        metadata:
            Optional caller metadata copied onto every chunk.

        Raises
        ------
        akashic.utils.errors.VectorStoreError
            If the backend rejects the batch or cannot be reached.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"chromadb"``."""

    async def aclose(self) -> None:
        """Release network resources held by the provider."""
