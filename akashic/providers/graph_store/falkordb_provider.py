"""FalkorDB graph-store adapter speaking ``GRAPH.QUERY`` over Redis.

FalkorDB has no parameter binding on the plain command path, so values are
inlined as single-quoted Cypher string literals.  Backslashes and single
quotes are escaped, and the text is cut to its first 1000 characters
before escaping so an escape sequence is never split.
"""

from __future__ import annotations

import json
from typing import Any

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from akashic.interfaces.graph_store_provider import IGraphStoreProvider
from akashic.utils.errors import ConfigurationError, GraphStoreError
from akashic.utils.logging import get_logger

_DEFAULT_GRAPH = "akashic"
_MAX_TEXT_CHARS = 1000


def cypher_literal(value: str) -> str:
    """Return *value* as a single-quoted Cypher string literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def build_create_query(
    document_id: str,
    text: str,
    metadata: dict[str, Any] | None = None,
) -> str:
    """Build the ``CREATE`` statement for one document node."""
    metadata_json = json.dumps(metadata) if metadata is not None else "{}"
    return (
        "CREATE (d:Document {"
        f"id: {cypher_literal(document_id)}, "
        f"text: {cypher_literal(text[:_MAX_TEXT_CHARS])}, "
        f"metadata: {cypher_literal(metadata_json)}, "
        "created_at: timestamp()})"
    )


class FalkorDBGraphStoreProvider(IGraphStoreProvider):
    """Graph store backed by FalkorDB (Redis module)."""

    def __init__(
        self,
        uri: str,
        graph_name: str = _DEFAULT_GRAPH,
        client: aioredis.Redis | None = None,
    ) -> None:
        self._uri = uri
        self._graph_name = graph_name
        if client is None:
            try:
                client = aioredis.from_url(uri)
            except ValueError as exc:
                raise ConfigurationError(
                    f"Invalid FalkorDB URI {uri!r}: {exc}", provider_name="falkordb"
                ) from exc
        self._client = client
        self._logger = get_logger(__name__)

    async def initialize(self) -> None:
        try:
            await self._client.ping()
        except (RedisError, OSError) as exc:
            raise GraphStoreError(
                f"Failed to connect to FalkorDB at {self._uri}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        self._logger.info("falkordb_connected", uri=self._uri, graph=self._graph_name)

    async def ingest(
        self,
        document_id: str,
        text: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        query = build_create_query(document_id, text, metadata)
        try:
            await self._client.execute_command("GRAPH.QUERY", self._graph_name, query)
        except (RedisError, OSError) as exc:
            raise GraphStoreError(
                f"FalkorDB query failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        self._logger.info(
            "falkordb_document_created",
            document_id=document_id,
            graph=self._graph_name,
            truncated=len(text) > _MAX_TEXT_CHARS,
        )

    def get_provider_name(self) -> str:
        return "falkordb"

    async def aclose(self) -> None:
        await self._client.aclose()
