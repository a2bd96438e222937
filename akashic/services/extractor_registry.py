"""Extractor registry: picks a text extractor for a file by its extension.

Extractors are tried in a fixed priority order and the first one whose
``supports()`` matches wins.  The default order is PDF, Markdown, Text,
EPUB, DOC.  New formats are added with :meth:`ExtractorRegistry.register`
without touching the existing extractors.
"""

from __future__ import annotations

from pathlib import Path

from akashic.interfaces.extractor import IExtractor
from akashic.interfaces.ocr_provider import IOCRProvider
from akashic.providers.extractors import (
    DocExtractor,
    EPUBExtractor,
    MarkdownExtractor,
    PDFExtractor,
    TextExtractor,
)
from akashic.providers.ocr import TesseractCLIProvider


class ExtractorRegistry:
    """Ordered collection of :class:`IExtractor` strategies."""

    def __init__(self, extractors: list[IExtractor] | None = None) -> None:
        self._extractors: list[IExtractor] = list(extractors or [])

    @classmethod
    def default(cls, ocr: IOCRProvider | None = None) -> ExtractorRegistry:
        """Build the registry with the built-in extractors in priority order.

        Parameters
        ----------
        ocr:
            OCR provider shared by the PDF fallback and the DOC extractor.
            Defaults to the ``tesseract`` command-line tool.
        """
        ocr = ocr or TesseractCLIProvider()
        return cls(
            [
                PDFExtractor(ocr),
                MarkdownExtractor(),
                TextExtractor(),
                EPUBExtractor(),
                DocExtractor(ocr),
            ]
        )

    def register(self, extractor: IExtractor, first: bool = False) -> None:
        """Add *extractor* at the end of the order, or at the front if *first*."""
        if first:
            self._extractors.insert(0, extractor)
        else:
            self._extractors.append(extractor)

    def resolve(self, path: str | Path) -> IExtractor | None:
        """Return the first extractor that supports *path*, or ``None``."""
        for extractor in self._extractors:
            if extractor.supports(path):
                return extractor
        return None

    @property
    def extractors(self) -> list[IExtractor]:
        return list(self._extractors)
