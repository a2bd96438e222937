"""Tesseract OCR provider that shells out to the ``tesseract`` binary.

Runs ``tesseract <file> stdout`` as a child process and returns whatever
the tool prints.  No image preprocessing happens here; the tool reads the
source file directly, which is enough for scanned PDFs and the Word
placeholder path.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from akashic.interfaces.ocr_provider import IOCRProvider
from akashic.utils.errors import OCRExtractionError
from akashic.utils.logging import get_logger


class TesseractCLIProvider(IOCRProvider):
    """OCR provider backed by the Tesseract command-line tool."""

    def __init__(self, tesseract_cmd: str = "tesseract") -> None:
        self._cmd = tesseract_cmd
        self._logger = get_logger(__name__)

    async def extract_text(self, path: str | Path) -> str:
        self._logger.info("ocr_fallback_start", file_path=str(path), cmd=self._cmd)
        try:
            process = await asyncio.create_subprocess_exec(
                self._cmd,
                str(path),
                "stdout",
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise OCRExtractionError(
                "Failed to run tesseract. Make sure it's installed.",
                provider_name=self.get_provider_name(),
            ) from exc

        stdout, stderr = await process.communicate()

        if process.returncode != 0:
            raise OCRExtractionError(
                f"Tesseract failed: {stderr.decode('utf-8', errors='replace')}",
                provider_name=self.get_provider_name(),
            )

        try:
            text = stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise OCRExtractionError(
                "Invalid UTF-8 from tesseract",
                provider_name=self.get_provider_name(),
            ) from exc

        self._logger.info("ocr_fallback_complete", file_path=str(path), chars=len(text))
        return text

    def get_provider_name(self) -> str:
        return "tesseract"

    def is_available(self) -> bool:
        return shutil.which(self._cmd) is not None
