"""OCR fallback providers."""

from akashic.providers.ocr.tesseract_cli_provider import TesseractCLIProvider

__all__ = ["TesseractCLIProvider"]
