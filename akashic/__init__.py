"""Akashic — document ingestion into vector and graph knowledge stores.

Files or raw text are turned into plain text by format-aware extractors and
fanned out to a ChromaDB collection and/or a graph database (Neo4j,
FalkorDB, Graphiti).  Every ingestion request is tracked as a job record
whose status and progress are advanced by the pipeline orchestrator.
"""

__version__ = "0.1.0"
