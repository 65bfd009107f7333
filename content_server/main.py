"""
Content MCP Server — Entry Point

Loads the content archive, indexes it, registers all content tools and
starts the JSON-RPC listener on stdio.

Tools (6):
  list_recipes    — list every recipe path
  read_recipe     — read one recipe by name
  search_recipes  — BM25 search across recipes
  list_docs       — list every documentation path
  read_doc        — read one document by name
  search_docs     — BM25 search across documentation

Usage:
    purplestack-context <content-zip-path>
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from mcp_shared import MCPServer

from content_server import __version__
from content_server.archive import LoadError, load_archive
from content_server.corpus import build_corpora
from content_server.tools import build_tools

SERVER_NAME = "Purplestack Context Server"
SERVER_INSTRUCTIONS = (
    "A server providing Purplestack recipes and API documentation "
    "for AI-powered development assistance."
)

_logger = logging.getLogger("content.main")


def build_server(archive_path: str | Path) -> MCPServer:
    """Load and index *archive_path*, then register the six content tools."""
    corpora = build_corpora(load_archive(archive_path))
    return MCPServer(
        name=SERVER_NAME,
        version=__version__,
        tools=build_tools(corpora),
        instructions=SERVER_INSTRUCTIONS,
    )


def _configure_logging() -> None:
    # stdout carries JSON-RPC, so logs go to stderr
    level = os.environ.get("CONTENT_SERVER_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: purplestack-context <content-zip-path>")
        return 1

    _configure_logging()

    try:
        server = build_server(args[0])
    except LoadError as e:
        print(f"Failed to initialize server: {e}", file=sys.stderr)
        return 1

    _logger.info("Serving %d tools on stdio", len(server.tools))
    server.start()
    return 0


if __name__ == "__main__":
    sys.exit(main())
