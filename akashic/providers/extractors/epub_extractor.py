"""EPUB text extractor using ebooklib.

Walks the book's spine in reading order, decodes each XHTML document and
erases anything that looks like a markup tag with a regular expression.
Entities such as ``&amp;`` are left as-is.  Each document contributes its
text followed by a newline.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path

import ebooklib
from ebooklib import epub

from akashic.interfaces.extractor import IExtractor
from akashic.utils.errors import ExtractionError
from akashic.utils.logging import get_logger

_TAG_PATTERN = re.compile(r"<[^>]*>")


class EPUBExtractor(IExtractor):
    """Extracts text from ``.epub`` books."""

    extensions = (".epub",)

    def __init__(self) -> None:
        self._logger = get_logger(__name__)

    async def extract(self, path: str | Path) -> str:
        text, documents = await asyncio.to_thread(self._read_spine, str(path))
        self._logger.info(
            "epub_extracted", file_path=str(path), documents=documents, chars=len(text)
        )
        return text

    def get_name(self) -> str:
        return "epub"

    @staticmethod
    def _read_spine(file_path: str) -> tuple[str, int]:
        try:
            book = epub.read_epub(file_path, options={"ignore_ncx": True})
        except Exception as exc:
            raise ExtractionError(
                "Failed to open EPUB file", provider_name="ebooklib"
            ) from exc

        parts: list[str] = []
        for idref, _linear in book.spine:
            item = book.get_item_with_id(idref)
            if item is None or item.get_type() != ebooklib.ITEM_DOCUMENT:
                continue
            html_content = item.get_content().decode("utf-8", errors="replace")
            parts.append(_TAG_PATTERN.sub("", html_content))
            parts.append("\n")

        return "".join(parts), len(parts) // 2
