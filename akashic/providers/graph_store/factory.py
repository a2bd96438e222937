"""Graph store factory: builds a connected adapter from a backend tag.

Configuration arrives as a plain dict (drivers build it from
:meth:`akashic.config.Settings.graph_config`).  Missing required keys are
reported as :class:`ConfigurationError` before any connection is opened.
"""

from __future__ import annotations

from typing import Any

from akashic.interfaces.graph_store_provider import IGraphStoreProvider
from akashic.models.ingestion import GraphDbType
from akashic.providers.graph_store.falkordb_provider import FalkorDBGraphStoreProvider
from akashic.providers.graph_store.graphiti_provider import GraphitiGraphStoreProvider
from akashic.providers.graph_store.neo4j_provider import Neo4jGraphStoreProvider
from akashic.utils.errors import ConfigurationError


def _require(config: dict[str, Any], backend: str, key: str) -> str:
    value = config.get(key)
    if not value:
        raise ConfigurationError(f"Missing {backend} {key}", provider_name=backend)
    return str(value)


async def create_graph_store(
    db_type: GraphDbType,
    config: dict[str, Any],
    enable_graphiti: bool = False,
) -> IGraphStoreProvider:
    """Construct and initialise the graph store for *db_type*.

    Parameters
    ----------
    db_type:
        Which backend to build.
    config:
        ``neo4j`` needs ``uri``, ``user`` and ``password``.  ``falkordb``
        needs ``uri`` and takes an optional ``graph_name``.  ``graphiti``
        takes an optional ``script_path``.
    enable_graphiti:
        Graphiti interop is off unless this is set.

    Raises
    ------
    ConfigurationError
        If a required key is missing, a URI is malformed, or Graphiti is
        selected while disabled.
    GraphStoreError
        If the backend connection cannot be verified.  The half-built
        store is closed before the error propagates.
    """
    db_type = GraphDbType(db_type)

    store: IGraphStoreProvider
    if db_type == GraphDbType.NEO4J:
        store = Neo4jGraphStoreProvider(
            uri=_require(config, "neo4j", "uri"),
            user=_require(config, "neo4j", "user"),
            password=_require(config, "neo4j", "password"),
        )
    elif db_type == GraphDbType.FALKORDB:
        store = FalkorDBGraphStoreProvider(
            uri=_require(config, "falkordb", "uri"),
            graph_name=config.get("graph_name") or "akashic",
        )
    else:
        if not enable_graphiti:
            raise ConfigurationError(
                "Graphiti support is not enabled", provider_name="graphiti"
            )
        store = GraphitiGraphStoreProvider(
            script_path=config.get("script_path") or "graphiti_ingest"
        )

    try:
        await store.initialize()
    except Exception:
        await store.aclose()
        raise
    return store
