"""PDF text extractor built on PyMuPDF with an OCR fallback.

Text-based PDFs are read page by page through ``fitz``.  When the native
path fails (the file cannot be opened or parsed, or it carries no text
layer at all, as with scanned documents) the file is handed to the OCR
provider once.  The run fails only when both paths fail.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import fitz  # PyMuPDF -- the "fitz" import name is a PyMuPDF convention

from akashic.interfaces.extractor import IExtractor
from akashic.interfaces.ocr_provider import IOCRProvider
from akashic.utils.errors import ExtractionError
from akashic.utils.logging import get_logger


class PDFExtractor(IExtractor):
    """Extracts text from ``.pdf`` files, falling back to OCR."""

    extensions = (".pdf",)

    def __init__(self, ocr: IOCRProvider) -> None:
        self._ocr = ocr
        self._logger = get_logger(__name__)

    async def extract(self, path: str | Path) -> str:
        try:
            text = await asyncio.to_thread(self._extract_pages, str(path))
        except Exception as exc:
            self._logger.warning(
                "pdf_native_extraction_failed",
                file_path=str(path),
                error=str(exc),
            )
        else:
            if text.strip():
                return text
            self._logger.warning("pdf_no_text_extracted", file_path=str(path))

        return await self._ocr.extract_text(path)

    def get_name(self) -> str:
        return "pdf"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _extract_pages(file_path: str) -> str:
        """Return the text of every page joined by a blank line.

        Raises
        ------
        ExtractionError
            If PyMuPDF cannot open or parse the file.
        """
        try:
            doc = fitz.open(file_path)
        except Exception as exc:
            raise ExtractionError(
                f"Failed to open PDF: {exc}", provider_name="pymupdf"
            ) from exc

        try:
            pages = [doc[page_num].get_text("text") for page_num in range(len(doc))]
        finally:
            doc.close()

        return "\n\n".join(pages)
