"""Abstract base class for graph-database backends.

A graph store records a document as a node so it can later be linked to
other entities.  Backends differ in wire protocol (Bolt, Redis
``GRAPH.QUERY``, in-process Python interop) but share this one operation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


# Concrete implementations: Neo4jGraphStoreProvider, FalkorDBGraphStoreProvider,
# GraphitiGraphStoreProvider (akashic/providers/graph_store/)
# Built via akashic.providers.graph_store.factory.create_graph_store().
class IGraphStoreProvider(ABC):
    """Contract for graph-store services used by the ingestion pipeline."""

    @abstractmethod
    async def ingest(
        self,
        document_id: str,
        text: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Create a document node for *document_id* holding *text*.

        Parameters
        ----------
        document_id:
            Stable identifier of the source document.
        text:
            Full extracted text.  Backends may truncate it.
        metadata:
            Optional caller metadata; serialised to JSON by the backend.

        Raises
        ------
        akashic.utils.errors.GraphStoreError
            If the write or the connection fails.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"neo4j"``."""

    async def initialize(self) -> None:
        """Open and verify the backend connection before the first run.

        Raises
        ------
        akashic.utils.errors.GraphStoreError
            If the backend cannot be reached.
        """

    async def aclose(self) -> None:
        """Release connections held by the provider."""
