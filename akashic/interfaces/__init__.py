"""Public interface definitions for all external components.

Every extractor, OCR engine, storage backend and job store in the Akashic
pipeline is accessed through the abstract base classes defined here.
Concrete adapters live in ``akashic/providers/`` and are injected into the
pipeline at construction time.

CONCRETE PROVIDER MAP:
    Interface                  →  Concrete implementations (in akashic/providers/)
    ─────────────────────────────────────────────────────────────────────
    IExtractor                 →  PDFExtractor, MarkdownExtractor, TextExtractor,
                                  EPUBExtractor, DocExtractor
    IOCRProvider               →  TesseractCLIProvider
    IVectorStoreProvider       →  ChromaDBHTTPProvider
    IGraphStoreProvider        →  Neo4jGraphStoreProvider,
                                  FalkorDBGraphStoreProvider,
                                  GraphitiGraphStoreProvider
    IJobRecordProvider         →  SQLiteJobRecordProvider
"""

from akashic.interfaces.extractor import IExtractor
from akashic.interfaces.graph_store_provider import IGraphStoreProvider
from akashic.interfaces.job_record_provider import IJobRecordProvider
from akashic.interfaces.ocr_provider import IOCRProvider
from akashic.interfaces.vector_store_provider import IVectorStoreProvider

__all__ = [
    "IExtractor",
    "IGraphStoreProvider",
    "IJobRecordProvider",
    "IOCRProvider",
    "IVectorStoreProvider",
]
