"""
Tests for list_recipes / list_docs.
"""

from __future__ import annotations

import pytest

from content_server.content_types import ContentCategory
from content_server.corpus import Corpus
from content_server.tools.list_content import ListContent, Params


class TestListContent:
    """Test the list tool execution."""

    def test_names(self, recipes: Corpus, docs: Corpus) -> None:
        assert ListContent(recipes).name == "list_recipes"
        assert ListContent(docs).name == "list_docs"

    @pytest.mark.asyncio
    async def test_lists_sorted_paths(self, recipes: Corpus) -> None:
        result = await ListContent(recipes).execute(Params())

        assert result.splitlines() == [
            "Available recipes:",
            "- feed.md",
            "- nested/profile.md",
            "- zaps/send-zap.md",
        ]

    @pytest.mark.asyncio
    async def test_single_recipe(self) -> None:
        corpus = Corpus(ContentCategory.RECIPE, {"feed.md": "Building a feed"})
        result = await ListContent(corpus).execute(Params())

        assert result.splitlines()[1:] == ["- feed.md"]

    @pytest.mark.asyncio
    async def test_docs_header(self, docs: Corpus) -> None:
        result = await ListContent(docs).execute(Params())

        assert result.startswith("Available documentation:\n")
        assert "- models/note.html" in result.splitlines()

    @pytest.mark.asyncio
    async def test_empty_docs(self, empty_docs: Corpus) -> None:
        result = await ListContent(empty_docs).execute(Params())

        assert result == "No documentation available."

    @pytest.mark.asyncio
    async def test_empty_recipes(self) -> None:
        corpus = Corpus(ContentCategory.RECIPE, {})
        result = await ListContent(corpus).execute(Params())

        assert result == "No recipes available."
