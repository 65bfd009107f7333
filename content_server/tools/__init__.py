"""Content tools, instantiated once per category corpus."""

from __future__ import annotations

from mcp_shared import MCPTool

from content_server.content_types import ContentCategory
from content_server.corpus import Corpus
from content_server.tools.list_content import ListContent
from content_server.tools.read_content import ReadContent
from content_server.tools.search_content import SearchContent

__all__ = ["ListContent", "ReadContent", "SearchContent", "build_tools"]


def build_tools(corpora: dict[ContentCategory, Corpus]) -> list[MCPTool]:
    """list / read / search for recipes, then the same three for docs."""
    tools: list[MCPTool] = []
    for category in (ContentCategory.RECIPE, ContentCategory.DOC):
        corpus = corpora[category]
        tools.extend([ListContent(corpus), ReadContent(corpus), SearchContent(corpus)])
    return tools
