"""ChromaDB vector-store adapter speaking the v1 HTTP API.

Talks to a running Chroma server through an ``httpx.AsyncClient`` instead
of the ``chromadb`` client library, so the server side owns embedding and
persistence.  Text is split into paragraph chunks on blank lines; every
chunk becomes one record with id ``{document_id}_{index}``.
"""

from __future__ import annotations

from typing import Any

import httpx

from akashic.interfaces.vector_store_provider import IVectorStoreProvider
from akashic.utils.errors import ConfigurationError, VectorStoreError
from akashic.utils.logging import get_logger

_DEFAULT_COLLECTION = "akashic"
_CHUNK_SEPARATOR = "\n\n"


def split_chunks(text: str) -> list[str]:
    """Split *text* on blank lines, dropping whitespace-only chunks.

    Kept chunks are returned unchanged (not stripped).
    """
    return [chunk for chunk in text.split(_CHUNK_SEPARATOR) if chunk.strip()]


class ChromaDBHTTPProvider(IVectorStoreProvider):
    """Vector store backed by a remote ChromaDB server.

    Parameters
    ----------
    base_url:
        Root URL of the Chroma server, e.g. ``http://localhost:8000``.
    collection_name:
        Target collection.  Created on :meth:`initialize` if missing.
    http_client:
        Optional pre-built client (tests inject one with a mock transport).
        When omitted the provider owns its client and closes it in
        :meth:`aclose`.
    """

    def __init__(
        self,
        base_url: str,
        collection_name: str = _DEFAULT_COLLECTION,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        try:
            url = httpx.URL(base_url)
        except httpx.InvalidURL as exc:
            raise ConfigurationError(
                f"Invalid ChromaDB URL {base_url!r}: {exc}", provider_name="chromadb"
            ) from exc
        if url.scheme not in ("http", "https"):
            raise ConfigurationError(
                f"Invalid ChromaDB URL {base_url!r}: scheme must be http or https",
                provider_name="chromadb",
            )

        self._base_url = base_url.rstrip("/")
        self._collection = collection_name
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=30.0)
        self._logger = get_logger(__name__)

    async def initialize(self) -> None:
        """Ask the server to create the collection.

        Any outcome is accepted: "already exists" errors, other non-2xx
        responses and connection failures are logged and ignored.  A server
        that is really down surfaces on the first :meth:`ingest` instead.
        """
        url = f"{self._base_url}/api/v1/collections"
        try:
            response = await self._http.post(
                url, json={"name": self._collection, "metadata": {}}
            )
        except httpx.HTTPError as exc:
            self._logger.warning(
                "chromadb_collection_create_failed",
                collection=self._collection,
                error=str(exc),
            )
            return

        self._logger.debug(
            "chromadb_collection_create",
            collection=self._collection,
            status_code=response.status_code,
        )

    async def ingest(
        self,
        document_id: str,
        text: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        chunks = split_chunks(text)
        if not chunks:
            self._logger.info("chromadb_no_chunks", document_id=document_id)
            return

        ids: list[str] = []
        metadatas: list[dict[str, Any]] = []
        for idx, _chunk in enumerate(chunks):
            ids.append(f"{document_id}_{idx}")
            chunk_meta = dict(metadata or {})
            chunk_meta["chunk_index"] = idx
            chunk_meta["document_id"] = document_id
            metadatas.append(chunk_meta)

        url = f"{self._base_url}/api/v1/collections/{self._collection}/add"
        payload = {"ids": ids, "documents": chunks, "metadatas": metadatas}

        try:
            response = await self._http.post(url, json=payload)
        except httpx.HTTPError as exc:
            raise VectorStoreError(
                f"ChromaDB request failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not response.is_success:
            raise VectorStoreError(
                f"ChromaDB request failed: {response.text}",
                provider_name=self.get_provider_name(),
            )

        self._logger.info(
            "chromadb_chunks_added",
            document_id=document_id,
            collection=self._collection,
            chunks=len(chunks),
        )

    def get_provider_name(self) -> str:
        return "chromadb"

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()
