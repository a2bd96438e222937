"""Plain-text and Markdown extractors.

Both formats are returned exactly as stored on disk; Markdown syntax is not
rendered or stripped.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from akashic.interfaces.extractor import IExtractor
from akashic.utils.errors import ExtractionError


def _read_utf8(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ExtractionError(f"Failed to read {path}: {exc}") from exc


class TextExtractor(IExtractor):
    """Returns ``.txt`` file contents verbatim."""

    extensions = (".txt",)

    async def extract(self, path: str | Path) -> str:
        return await asyncio.to_thread(_read_utf8, path)

    def get_name(self) -> str:
        return "text"


class MarkdownExtractor(IExtractor):
    """Returns ``.md`` / ``.markdown`` file contents verbatim."""

    extensions = (".md", ".markdown")

    async def extract(self, path: str | Path) -> str:
        return await asyncio.to_thread(_read_utf8, path)

    def get_name(self) -> str:
        return "markdown"
