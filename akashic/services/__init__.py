"""Service layer: composition helpers sitting between providers and the pipeline."""

from akashic.services.extractor_registry import ExtractorRegistry

__all__ = ["ExtractorRegistry"]
