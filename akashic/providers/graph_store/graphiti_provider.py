"""Graphiti graph-store adapter via in-process Python module interop.

Graphiti ingestion lives in a user-supplied Python module exposing
``ingest_document(document_id, text, metadata)``.  The module is imported
once at construction; a plain function runs in a worker thread and a
coroutine function is awaited directly.  Metadata values are handed over
as JSON strings.
"""

from __future__ import annotations

import asyncio
import importlib
import importlib.util
import inspect
import json
from pathlib import Path
from types import ModuleType
from typing import Any

from akashic.interfaces.graph_store_provider import IGraphStoreProvider
from akashic.utils.errors import ConfigurationError, GraphStoreError
from akashic.utils.logging import get_logger

_DEFAULT_SCRIPT = "graphiti_ingest"
_ENTRY_POINT = "ingest_document"


def _load_module(script_path: str) -> ModuleType:
    """Import *script_path* as a dotted module name or a ``.py`` file path."""
    if script_path.endswith(".py"):
        path = Path(script_path)
        spec = importlib.util.spec_from_file_location(path.stem, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"cannot load {script_path}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module
    return importlib.import_module(script_path)


class GraphitiGraphStoreProvider(IGraphStoreProvider):
    """Graph store that delegates to a Graphiti ingestion module.

    Raises
    ------
    ConfigurationError
        At construction, if the module cannot be imported or does not
        define a callable ``ingest_document``.
    """

    def __init__(self, script_path: str = _DEFAULT_SCRIPT) -> None:
        self._logger = get_logger(__name__)
        try:
            module = _load_module(script_path)
        except Exception as exc:
            raise ConfigurationError(
                f"Failed to import Graphiti module '{script_path}': {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        ingest_fn = getattr(module, _ENTRY_POINT, None)
        if not callable(ingest_fn):
            raise ConfigurationError(
                f"Graphiti module '{script_path}' has no {_ENTRY_POINT}() function",
                provider_name=self.get_provider_name(),
            )
        self._ingest_fn = ingest_fn
        self._script_path = script_path

    async def ingest(
        self,
        document_id: str,
        text: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        meta = {key: json.dumps(value) for key, value in (metadata or {}).items()}
        try:
            if inspect.iscoroutinefunction(self._ingest_fn):
                await self._ingest_fn(document_id, text, meta)
            else:
                await asyncio.to_thread(self._ingest_fn, document_id, text, meta)
        except Exception as exc:
            raise GraphStoreError(
                f"Graphiti ingestion failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        self._logger.info(
            "graphiti_document_ingested",
            document_id=document_id,
            script=self._script_path,
        )

    def get_provider_name(self) -> str:
        return "graphiti"
