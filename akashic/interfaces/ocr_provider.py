"""Abstract base class for OCR fallback providers.

Extractors that cannot read a file natively (scanned PDFs, Word documents)
hand the file path to an OCR provider.  The default implementation shells
out to the Tesseract command-line tool.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


# Concrete implementation: TesseractCLIProvider (akashic/providers/ocr/)
class IOCRProvider(ABC):
    """Contract for OCR engines that read text straight from a file on disk."""

    @abstractmethod
    async def extract_text(self, path: str | Path) -> str:
        """Run OCR over the file at *path* and return the recognised text.

        Raises
        ------
        akashic.utils.errors.OCRExtractionError
            If the OCR engine is missing, exits non-zero, or emits output
            that is not valid UTF-8.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"tesseract"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the OCR engine can be invoked on this host."""
