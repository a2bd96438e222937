"""Command-line tools for Akashic.

- ``python -m akashic.cli ingest`` -- ingest a file or stdin text
- ``python -m akashic.cli status`` -- show a job's status
"""
