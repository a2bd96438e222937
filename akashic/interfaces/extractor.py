"""Abstract base class for format-specific text extractors.

Defines the contract for turning a source file into plain text.  Each
concrete extractor handles one family of file extensions (PDF, Markdown,
plain text, EPUB, Word documents) and is registered with the
:class:`~akashic.services.extractor_registry.ExtractorRegistry`, which
tries extractors in a fixed priority order and picks the first match.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


# Concrete implementations: PDFExtractor, MarkdownExtractor, TextExtractor,
# EPUBExtractor, DocExtractor
# Located in: akashic/providers/extractors/
class IExtractor(ABC):
    """Contract for text extractors selected by file extension.

    Extraction may block (file IO, PDF parsing), so ``extract`` is async and
    implementations push blocking work onto a worker thread.
    """

    # Lowercase suffixes (including the dot) this extractor accepts.
    extensions: tuple[str, ...] = ()

    def supports(self, path: str | Path) -> bool:
        """Return ``True`` if *path* ends with one of :attr:`extensions`.

        Matching is case-insensitive: ``REPORT.PDF`` is a PDF.
        """
        name = str(path).lower()
        return any(name.endswith(ext) for ext in self.extensions)

    @abstractmethod
    async def extract(self, path: str | Path) -> str:
        """Read *path* and return its plain-text content.

        Parameters
        ----------
        path:
            Location of the source file on local disk.

        Returns
        -------
        str
            The extracted text.  May be empty for sources with no text.

        Raises
        ------
        akashic.utils.errors.ExtractionError
            If the file cannot be read or parsed (including OCR failure).
        """

    @abstractmethod
    def get_name(self) -> str:
        """Return a short identifier for this extractor, e.g. ``"pdf"``."""
