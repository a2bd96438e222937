"""Vector-store adapters."""

from akashic.providers.vector_store.chromadb_http_provider import ChromaDBHTTPProvider

__all__ = ["ChromaDBHTTPProvider"]
