"""Allow ``python -m akashic.cli`` execution."""

from akashic.cli.ingest import main

main()
