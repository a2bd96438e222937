"""Format-specific text extractors.

- **PDFExtractor**      -- PyMuPDF page text with Tesseract OCR fallback
- **MarkdownExtractor** -- ``.md`` / ``.markdown`` read verbatim
- **TextExtractor**     -- ``.txt`` read verbatim
- **EPUBExtractor**     -- spine documents via ebooklib, tags erased by regex
- **DocExtractor**      -- ``.doc`` / ``.docx`` routed straight to OCR
"""

from akashic.providers.extractors.doc_extractor import DocExtractor
from akashic.providers.extractors.epub_extractor import EPUBExtractor
from akashic.providers.extractors.pdf_extractor import PDFExtractor
from akashic.providers.extractors.text_extractor import MarkdownExtractor, TextExtractor

__all__ = [
    "DocExtractor",
    "EPUBExtractor",
    "MarkdownExtractor",
    "PDFExtractor",
    "TextExtractor",
]
