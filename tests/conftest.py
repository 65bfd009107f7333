"""
Shared fixtures for content server tests.

Builds small zip content archives in a temporary directory and the
corpora / server loaded from them.
"""

from __future__ import annotations

import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

from content_server.archive import load_archive
from content_server.content_types import ContentCategory
from content_server.corpus import Corpus, build_corpora
from content_server.main import build_server
from mcp_shared import MCPServer

ArchiveFactory = Callable[[dict[str, bytes | str]], Path]

SAMPLE_ENTRIES: dict[str, bytes | str] = {
    "recipes/feed.md": "# Building a feed\n\nSubscribe to kind 1 notes and render them.",
    "recipes/nested/profile.md": "# Profile screen\n\nShow the avatar and metadata of a user.",
    "recipes/zaps/send-zap.md": "# Sending zaps\n\nCreate a zap request and pay the invoice.",
    "api-docs/zap.md": "# Zap\n\nA zap receipt model with amount and sender.",
    "api-docs/zap-request.md": "# ZapRequest\n\nModel for a zap request event.",
    "api-docs/models/note.html": "<h1>Note</h1><p>A short text note model.</p>",
    "api-docs/logo.png": b"\x89PNG\r\n\x1a\n\x00\x00",
    "README.md": "# Content bundle",
    "other/feed.md": "not served",
}


@pytest.fixture()
def make_archive(tmp_path: Path) -> ArchiveFactory:
    """Return a factory that writes *entries* to a new zip and returns its path."""
    counter = {"n": 0}

    def _make(entries: dict[str, bytes | str]) -> Path:
        counter["n"] += 1
        path = tmp_path / f"content-{counter['n']}.zip"
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for name, data in entries.items():
                archive.writestr(name, data)
        return path

    return _make


@pytest.fixture()
def sample_archive(make_archive: ArchiveFactory) -> Path:
    """
    Archive with three recipes, three docs and some entries to skip.

    Structure:
        recipes/feed.md, recipes/nested/profile.md, recipes/zaps/send-zap.md
        api-docs/zap.md, api-docs/zap-request.md, api-docs/models/note.html
        api-docs/logo.png, README.md, other/feed.md  (ignored)
    """
    return make_archive(SAMPLE_ENTRIES)


@pytest.fixture()
def corpora(sample_archive: Path) -> dict[ContentCategory, Corpus]:
    return build_corpora(load_archive(sample_archive))


@pytest.fixture()
def recipes(corpora: dict[ContentCategory, Corpus]) -> Corpus:
    return corpora[ContentCategory.RECIPE]


@pytest.fixture()
def docs(corpora: dict[ContentCategory, Corpus]) -> Corpus:
    return corpora[ContentCategory.DOC]


@pytest.fixture()
def empty_docs() -> Corpus:
    return Corpus(ContentCategory.DOC, {})


@pytest.fixture()
def server(sample_archive: Path) -> MCPServer:
    return build_server(sample_archive)
