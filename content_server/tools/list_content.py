"""
list_recipes / list_docs — List every document path of a category.

Paths are sorted lexically, one ``- <path>`` line each.
"""

from __future__ import annotations

from pydantic import BaseModel

from mcp_shared import MCPTool

from content_server.corpus import Corpus


class Params(BaseModel):
    """Parameters for list_recipes / list_docs (none)."""


class ListContent(MCPTool[Params]):
    """List all documents of one category."""

    def __init__(self, corpus: Corpus) -> None:
        self.corpus = corpus
        labels = corpus.category.labels
        self.name = f"list_{corpus.category.collection}"
        self.description = f"List all available {labels.list_title}"

    async def execute(self, params: Params) -> str:
        labels = self.corpus.category.labels
        if not len(self.corpus):
            return f"No {labels.list_title} available."

        lines = "\n".join(f"- {path}" for path in sorted(self.corpus.keys()))
        return f"Available {labels.list_title}:\n{lines}"
