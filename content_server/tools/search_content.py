"""
search_recipes / search_docs — BM25 search over one category.

Returns up to five ``<path> (<score>)`` lines, best first, under a header
echoing the query. Scores are shown with two decimals.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mcp_shared import MCPTool

from content_server.corpus import DEFAULT_TOP_K, Corpus


class Params(BaseModel):
    """Parameters for search_recipes / search_docs."""

    model_config = ConfigDict(json_schema_extra={"required": ["query"]})

    query: str | None = Field(default=None, description="Search query")


class SearchContent(MCPTool[Params]):
    """Rank the documents of one category against a query."""

    def __init__(self, corpus: Corpus) -> None:
        self.corpus = corpus
        self.name = f"search_{corpus.category.collection}"
        self.description = f"Search {corpus.category.labels.list_title} by query"

    def get_input_schema(self) -> dict[str, Any]:
        schema = super().get_input_schema()
        schema["properties"]["query"] = {
            "type": "string",
            "description": f"Search query for {self.corpus.category.labels.list_title}",
        }
        return schema

    async def execute(self, params: Params) -> str:
        query = params.query
        if not query:
            return "Error: Search query is required"

        if not self.corpus.is_indexed:
            return "Search index not available"

        hits = self.corpus.search(query, top_k=DEFAULT_TOP_K)
        if not hits:
            title = self.corpus.category.labels.list_title
            return f'No {title} found for query: "{query}"'

        lines = "\n".join(f"{hit.path} ({hit.score:.2f})" for hit in hits)
        return f'Search results for "{query}":\n\n{lines}'
