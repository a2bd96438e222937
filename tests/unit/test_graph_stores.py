"""Unit tests for the graph-store adapters and their factory."""

from __future__ import annotations

import textwrap
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from neo4j.exceptions import ConfigurationError as Neo4jConfigurationError
from neo4j.exceptions import ServiceUnavailable
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError

from akashic.models.ingestion import GraphDbType
from akashic.providers.graph_store.factory import create_graph_store
from akashic.providers.graph_store.falkordb_provider import (
    FalkorDBGraphStoreProvider,
    build_create_query,
    cypher_literal,
)
from akashic.providers.graph_store.graphiti_provider import GraphitiGraphStoreProvider
from akashic.providers.graph_store.neo4j_provider import Neo4jGraphStoreProvider
from akashic.utils.errors import ConfigurationError, GraphStoreError


# ======================================================================
# Neo4j
# ======================================================================


class _FakeTx:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []

    async def run(self, query: str, params: dict) -> MagicMock:
        self.calls.append((query, params))
        result = MagicMock()
        result.consume = AsyncMock()
        return result


class _FakeSession:
    def __init__(self, tx: _FakeTx, error: Exception | None = None) -> None:
        self._tx = tx
        self._error = error

    async def __aenter__(self) -> _FakeSession:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    async def execute_write(self, work):  # noqa: ANN001, ANN201
        if self._error is not None:
            raise self._error
        return await work(self._tx)


def _neo4j_driver(tx: _FakeTx, error: Exception | None = None) -> MagicMock:
    driver = MagicMock()
    driver.session.return_value = _FakeSession(tx, error)
    driver.verify_connectivity = AsyncMock()
    driver.close = AsyncMock()
    return driver


class TestNeo4jGraphStore:
    @pytest.mark.asyncio
    async def test_creates_document_node(self) -> None:
        tx = _FakeTx()
        store = Neo4jGraphStoreProvider("bolt://x", "u", "p", driver=_neo4j_driver(tx))

        await store.ingest("42", "full text", {"source": "cli"})

        query, params = tx.calls[0]
        assert query.startswith("CREATE (d:Document {id: $id, text: $text")
        assert "created_at: datetime()" in query
        assert params == {"id": "42", "text": "full text", "metadata": '{"source": "cli"}'}

    @pytest.mark.asyncio
    async def test_missing_metadata_serialised_as_empty_object(self) -> None:
        tx = _FakeTx()
        store = Neo4jGraphStoreProvider("bolt://x", "u", "p", driver=_neo4j_driver(tx))

        await store.ingest("1", "t")

        assert tx.calls[0][1]["metadata"] == "{}"

    @pytest.mark.asyncio
    async def test_write_failure_raises_graph_store_error(self) -> None:
        driver = _neo4j_driver(_FakeTx(), error=ServiceUnavailable("gone"))
        store = Neo4jGraphStoreProvider("bolt://x", "u", "p", driver=driver)

        with pytest.raises(GraphStoreError) as exc_info:
            await store.ingest("1", "t")
        assert exc_info.value.provider_name == "neo4j"

    @pytest.mark.asyncio
    async def test_initialize_verifies_connectivity(self) -> None:
        driver = _neo4j_driver(_FakeTx())
        driver.verify_connectivity.side_effect = ServiceUnavailable("no route")
        store = Neo4jGraphStoreProvider("bolt://x", "u", "p", driver=driver)

        with pytest.raises(GraphStoreError, match="Failed to connect to Neo4j"):
            await store.initialize()

    @pytest.mark.asyncio
    async def test_aclose_closes_driver(self) -> None:
        driver = _neo4j_driver(_FakeTx())
        await Neo4jGraphStoreProvider("bolt://x", "u", "p", driver=driver).aclose()
        driver.close.assert_awaited_once()

    def test_malformed_uri_is_configuration_error(self) -> None:
        with patch(
            "akashic.providers.graph_store.neo4j_provider.AsyncGraphDatabase.driver",
            side_effect=Neo4jConfigurationError("URI scheme 'http' is not supported"),
        ):
            with pytest.raises(ConfigurationError, match="Invalid Neo4j URI") as exc_info:
                Neo4jGraphStoreProvider("http://x", "u", "p")
        assert exc_info.value.provider_name == "neo4j"


# ======================================================================
# FalkorDB
# ======================================================================


class TestFalkorDBQuery:
    def test_literal_escapes_quotes_and_backslashes(self) -> None:
        assert cypher_literal("it's") == "'it\\'s'"
        assert cypher_literal("a\\b") == "'a\\\\b'"

    def test_create_query_shape(self) -> None:
        query = build_create_query("9", "hello", {"k": "v"})
        assert query == (
            "CREATE (d:Document {id: '9', text: 'hello', "
            "metadata: '{\"k\": \"v\"}', created_at: timestamp()})"
        )

    def test_text_truncated_to_1000_chars_before_escaping(self) -> None:
        text = "x" * 999 + "'" + "Z" * 500
        query = build_create_query("1", text)
        assert "x" * 999 + "\\'" + "'" in query
        assert "Z" not in query

    def test_missing_metadata_is_empty_object(self) -> None:
        assert "metadata: '{}'" in build_create_query("1", "t")


class TestFalkorDBGraphStore:
    @pytest.mark.asyncio
    async def test_ingest_issues_graph_query(self) -> None:
        client = MagicMock()
        client.execute_command = AsyncMock(return_value=[])
        store = FalkorDBGraphStoreProvider("redis://x", "kb", client=client)

        await store.ingest("3", "body")

        command, graph, query = client.execute_command.await_args.args
        assert command == "GRAPH.QUERY"
        assert graph == "kb"
        assert query == build_create_query("3", "body")

    @pytest.mark.asyncio
    async def test_default_graph_name(self) -> None:
        client = MagicMock()
        client.execute_command = AsyncMock(return_value=[])
        store = FalkorDBGraphStoreProvider("redis://x", client=client)

        await store.ingest("3", "body")

        assert client.execute_command.await_args.args[1] == "akashic"

    @pytest.mark.asyncio
    async def test_redis_error_raises_graph_store_error(self) -> None:
        client = MagicMock()
        client.execute_command = AsyncMock(side_effect=ResponseError("syntax error"))
        store = FalkorDBGraphStoreProvider("redis://x", client=client)

        with pytest.raises(GraphStoreError, match="FalkorDB query failed"):
            await store.ingest("3", "body")

    @pytest.mark.asyncio
    async def test_initialize_pings(self) -> None:
        client = MagicMock()
        client.ping = AsyncMock(side_effect=RedisConnectionError("refused"))
        store = FalkorDBGraphStoreProvider("redis://x", client=client)

        with pytest.raises(GraphStoreError, match="Failed to connect to FalkorDB"):
            await store.initialize()

    def test_uri_without_scheme_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid FalkorDB URI") as exc_info:
            FalkorDBGraphStoreProvider("localhost:6379")
        assert exc_info.value.provider_name == "falkordb"


# ======================================================================
# Graphiti
# ======================================================================


def _write_module(tmp_path: Path, name: str, body: str) -> Path:
    path = tmp_path / f"{name}.py"
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


class TestGraphitiGraphStore:
    @pytest.mark.asyncio
    async def test_sync_function_receives_json_metadata(self, tmp_path: Path) -> None:
        path = _write_module(
            tmp_path,
            "graphiti_sync",
            """
            CALLS = []

            def ingest_document(document_id, text, metadata):
                CALLS.append((document_id, text, metadata))
            """,
        )
        store = GraphitiGraphStoreProvider(str(path))

        await store.ingest("5", "content", {"title": "Energy Flash", "year": 1998})

        calls = store._ingest_fn.__globals__["CALLS"]
        assert calls == [("5", "content", {"title": '"Energy Flash"', "year": "1998"})]

    @pytest.mark.asyncio
    async def test_async_function_is_awaited(self, tmp_path: Path) -> None:
        path = _write_module(
            tmp_path,
            "graphiti_async",
            """
            CALLS = []

            async def ingest_document(document_id, text, metadata):
                CALLS.append(document_id)
            """,
        )
        store = GraphitiGraphStoreProvider(str(path))

        await store.ingest("6", "content")

        assert store._ingest_fn.__globals__["CALLS"] == ["6"]

    @pytest.mark.asyncio
    async def test_function_failure_raises_graph_store_error(self, tmp_path: Path) -> None:
        path = _write_module(
            tmp_path,
            "graphiti_broken",
            """
            def ingest_document(document_id, text, metadata):
                raise RuntimeError("neo4j backend down")
            """,
        )
        store = GraphitiGraphStoreProvider(str(path))

        with pytest.raises(GraphStoreError, match="neo4j backend down"):
            await store.ingest("1", "t")

    def test_missing_module_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError, match="Failed to import Graphiti module"):
            GraphitiGraphStoreProvider("akashic_no_such_graphiti_module")

    def test_missing_entry_point_is_configuration_error(self, tmp_path: Path) -> None:
        path = _write_module(tmp_path, "graphiti_empty", "VALUE = 1\n")
        with pytest.raises(ConfigurationError, match="ingest_document"):
            GraphitiGraphStoreProvider(str(path))


# ======================================================================
# Factory
# ======================================================================


class TestCreateGraphStore:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["uri", "user", "password"])
    async def test_neo4j_requires_all_keys(self, missing: str) -> None:
        config = {"uri": "bolt://x", "user": "u", "password": "p"}
        del config[missing]
        with pytest.raises(ConfigurationError, match=f"Missing neo4j {missing}"):
            await create_graph_store(GraphDbType.NEO4J, config)

    @pytest.mark.asyncio
    async def test_falkordb_requires_uri(self) -> None:
        with pytest.raises(ConfigurationError, match="Missing falkordb uri"):
            await create_graph_store(GraphDbType.FALKORDB, {"graph_name": "kb"})

    @pytest.mark.asyncio
    async def test_falkordb_graph_name_defaults(self) -> None:
        with patch(
            "akashic.providers.graph_store.factory.FalkorDBGraphStoreProvider"
        ) as provider_cls:
            provider_cls.return_value.initialize = AsyncMock()
            store = await create_graph_store(GraphDbType.FALKORDB, {"uri": "redis://x"})

        provider_cls.assert_called_once_with(uri="redis://x", graph_name="akashic")
        store.initialize.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_neo4j_built_and_initialized(self) -> None:
        with patch(
            "akashic.providers.graph_store.factory.Neo4jGraphStoreProvider"
        ) as provider_cls:
            provider_cls.return_value.initialize = AsyncMock()
            await create_graph_store(
                "neo4j", {"uri": "bolt://x", "user": "u", "password": "p"}
            )

        provider_cls.assert_called_once_with(uri="bolt://x", user="u", password="p")

    @pytest.mark.asyncio
    async def test_graphiti_disabled(self) -> None:
        with pytest.raises(ConfigurationError, match="not enabled"):
            await create_graph_store(GraphDbType.GRAPHITI, {})

    @pytest.mark.asyncio
    async def test_graphiti_enabled_loads_script(self, tmp_path: Path) -> None:
        path = _write_module(
            tmp_path,
            "graphiti_factory",
            "def ingest_document(document_id, text, metadata):\n    return None\n",
        )
        store = await create_graph_store(
            GraphDbType.GRAPHITI, {"script_path": str(path)}, enable_graphiti=True
        )
        assert isinstance(store, GraphitiGraphStoreProvider)

    @pytest.mark.asyncio
    async def test_malformed_falkordb_uri_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid FalkorDB URI"):
            await create_graph_store(GraphDbType.FALKORDB, {"uri": "localhost:6379"})

    @pytest.mark.asyncio
    async def test_failed_initialize_closes_neo4j_driver(self) -> None:
        driver = MagicMock()
        driver.verify_connectivity = AsyncMock(side_effect=ServiceUnavailable("down"))
        driver.close = AsyncMock()
        with patch(
            "akashic.providers.graph_store.neo4j_provider.AsyncGraphDatabase.driver",
            return_value=driver,
        ):
            with pytest.raises(GraphStoreError, match="Failed to connect to Neo4j"):
                await create_graph_store(
                    GraphDbType.NEO4J, {"uri": "bolt://x", "user": "u", "password": "p"}
                )

        driver.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failed_initialize_closes_falkordb_client(self) -> None:
        client = MagicMock()
        client.ping = AsyncMock(side_effect=RedisConnectionError("refused"))
        client.aclose = AsyncMock()
        with patch(
            "akashic.providers.graph_store.falkordb_provider.aioredis.from_url",
            return_value=client,
        ):
            with pytest.raises(GraphStoreError, match="Failed to connect to FalkorDB"):
                await create_graph_store(GraphDbType.FALKORDB, {"uri": "redis://x"})

        client.aclose.assert_awaited_once()
