"""Target selector and graph backend discriminator for ingestion runs.

Both enums are closed sets serialised as lowercase strings, which is how
they are stored on the job record and accepted by the API and CLI.
"""

from __future__ import annotations

from enum import Enum


class IngestionTarget(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """Which store category (or categories) a run writes to."""

    VECTOR = "vector"
    GRAPH = "graph"
    BOTH = "both"

    @property
    def includes_vector(self) -> bool:
        return self in (IngestionTarget.VECTOR, IngestionTarget.BOTH)

    @property
    def includes_graph(self) -> bool:
        return self in (IngestionTarget.GRAPH, IngestionTarget.BOTH)


class GraphDbType(str, Enum):  # noqa: UP042
    """Selects the concrete graph store adapter and its required configuration."""

    NEO4J = "neo4j"
    FALKORDB = "falkordb"
    GRAPHITI = "graphiti"
