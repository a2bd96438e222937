"""Application settings loaded from environment variables via pydantic-settings.

Settings are read from environment variables (highest priority) and a
``.env`` file in the working directory.  Field ``neo4j_uri`` maps to the
``NEO4J_URI`` environment variable, and so on.

Only drivers (worker, API, CLI) read settings.  The ingestion core receives
connection details as explicit arguments so it never touches the
environment itself.
"""

from __future__ import annotations

from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

from akashic.models.ingestion import GraphDbType


class Settings(BaseSettings):
    """Akashic application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Vector store ===
    # Empty string = "not configured" → vector ingestion is skipped.
    chroma_url: str = ""
    chroma_collection: str = "akashic"

    # === Graph stores ===
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "password"
    falkordb_uri: str = "redis://localhost:6379"
    falkordb_graph: str = "akashic"
    # Graphiti interop is opt-in; when disabled selecting it is a config error.
    graphiti_enabled: bool = False
    graphiti_script: str = "graphiti_ingest"

    # === Extraction ===
    tesseract_cmd: str = "tesseract"

    # === Job records ===
    job_db_path: str = "data/akashic.db"
    # 0 disables the per-job timeout.
    ingest_timeout_seconds: float = 0.0

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    def graph_config(self, db_type: GraphDbType) -> dict[str, Any]:
        """Return the graph store factory configuration for *db_type*."""
        if db_type == GraphDbType.NEO4J:
            return {
                "uri": self.neo4j_uri,
                "user": self.neo4j_user,
                "password": self.neo4j_password,
            }
        if db_type == GraphDbType.FALKORDB:
            return {
                "uri": self.falkordb_uri,
                "graph_name": self.falkordb_graph,
            }
        return {"script_path": self.graphiti_script}
