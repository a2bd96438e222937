"""Word document placeholder extractor.

There is no native ``.doc`` / ``.docx`` parser; files are passed straight to
the OCR provider and a warning is logged so operators know the text came
from OCR.
"""

from __future__ import annotations

from pathlib import Path

from akashic.interfaces.extractor import IExtractor
from akashic.interfaces.ocr_provider import IOCRProvider
from akashic.utils.logging import get_logger


class DocExtractor(IExtractor):
    """Routes ``.doc`` / ``.docx`` files to OCR."""

    extensions = (".doc", ".docx")

    def __init__(self, ocr: IOCRProvider) -> None:
        self._ocr = ocr
        self._logger = get_logger(__name__)

    async def extract(self, path: str | Path) -> str:
        self._logger.warning("doc_native_extraction_unsupported", file_path=str(path))
        return await self._ocr.extract_text(path)

    def get_name(self) -> str:
        return "doc"
