"""Neo4j graph-store adapter using the official async Bolt driver.

Each ingested document becomes a single ``:Document`` node carrying the
full text and the caller metadata serialised as a JSON string.  No entity
extraction or relationship building happens at ingestion time.
"""

from __future__ import annotations

import json
from typing import Any

from neo4j import AsyncDriver, AsyncGraphDatabase
from neo4j.exceptions import DriverError, Neo4jError

from akashic.interfaces.graph_store_provider import IGraphStoreProvider
from akashic.utils.errors import ConfigurationError, GraphStoreError
from akashic.utils.logging import get_logger

_CREATE_DOCUMENT_CYPHER = (
    "CREATE (d:Document {id: $id, text: $text, metadata: $metadata, "
    "created_at: datetime()})"
)


class Neo4jGraphStoreProvider(IGraphStoreProvider):
    """Graph store backed by Neo4j over Bolt."""

    def __init__(
        self,
        uri: str,
        user: str,
        password: str,
        driver: AsyncDriver | None = None,
    ) -> None:
        self._uri = uri
        if driver is None:
            try:
                driver = AsyncGraphDatabase.driver(uri, auth=(user, password))
            except (DriverError, ValueError) as exc:
                raise ConfigurationError(
                    f"Invalid Neo4j URI {uri!r}: {exc}", provider_name="neo4j"
                ) from exc
        self._driver = driver
        self._logger = get_logger(__name__)

    async def initialize(self) -> None:
        try:
            await self._driver.verify_connectivity()
        except (Neo4jError, DriverError, OSError) as exc:
            raise GraphStoreError(
                f"Failed to connect to Neo4j at {self._uri}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        self._logger.info("neo4j_connected", uri=self._uri)

    async def ingest(
        self,
        document_id: str,
        text: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        params = {
            "id": document_id,
            "text": text,
            "metadata": json.dumps(metadata) if metadata is not None else "{}",
        }

        async def _write_tx(tx: Any) -> None:
            result = await tx.run(_CREATE_DOCUMENT_CYPHER, params)
            await result.consume()

        try:
            async with self._driver.session() as session:
                await session.execute_write(_write_tx)
        except (Neo4jError, DriverError, OSError) as exc:
            raise GraphStoreError(
                f"Neo4j write failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        self._logger.info("neo4j_document_created", document_id=document_id)

    def get_provider_name(self) -> str:
        return "neo4j"

    async def aclose(self) -> None:
        await self._driver.close()
