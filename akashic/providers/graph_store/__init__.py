"""Graph-store adapters and the factory that selects between them."""

from akashic.providers.graph_store.factory import create_graph_store
from akashic.providers.graph_store.falkordb_provider import FalkorDBGraphStoreProvider
from akashic.providers.graph_store.graphiti_provider import GraphitiGraphStoreProvider
from akashic.providers.graph_store.neo4j_provider import Neo4jGraphStoreProvider

__all__ = [
    "FalkorDBGraphStoreProvider",
    "GraphitiGraphStoreProvider",
    "Neo4jGraphStoreProvider",
    "create_graph_store",
]
