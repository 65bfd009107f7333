"""
read_recipe / read_doc — Read one document by name.

Name resolution, first stage that succeeds wins:
  1. exact archive path
  2. case-insensitive partial match (path contains the name, or the
     filename without extension equals it); several matches are listed
     back to the caller instead of picking one
  3. not found, with up to three "did you mean" suggestions
"""

from __future__ import annotations

import posixpath
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mcp_shared import MCPTool

from content_server.corpus import Corpus

MAX_SUGGESTIONS = 3


class Params(BaseModel):
    """Parameters for read_recipe / read_doc."""

    # Advertised as required; a missing name is answered with a text error.
    model_config = ConfigDict(json_schema_extra={"required": ["name"]})

    name: str | None = Field(default=None, description="Name of the document to read")


class ReadContent(MCPTool[Params]):
    """Read a single document of one category by name."""

    def __init__(self, corpus: Corpus) -> None:
        self.corpus = corpus
        noun = corpus.category.labels.noun
        self.name = f"read_{corpus.category.value}"
        self.description = f"Read a specific {noun} by name"

    def get_input_schema(self) -> dict[str, Any]:
        schema = super().get_input_schema()
        noun = self.corpus.category.labels.noun
        # Advertise a plain required string; null is only tolerated at runtime
        schema["properties"]["name"] = {
            "type": "string",
            "description": f"Name of the {noun} to read",
        }
        return schema

    async def execute(self, params: Params) -> str:
        labels = self.corpus.category.labels
        name = params.name
        if name is None:
            return f"Error: {labels.noun.capitalize()} name is required"

        text = self.corpus.get(name)
        if text is not None:
            return text

        keys = self.corpus.keys()
        matches = find_matching_keys(name, keys)
        if len(matches) == 1:
            return self.corpus.get(matches[0]) or ""
        if matches:
            listing = "\n".join(f"- {key}" for key in matches)
            return (
                f"Multiple {labels.noun_plural} found. Please be more specific:\n"
                f"{listing}"
            )

        suggestions = find_similar_keys(name, keys)
        suggestion_text = (
            f"\n\nDid you mean: {', '.join(suggestions)}?" if suggestions else ""
        )
        return f'{labels.noun.capitalize()} "{name}" not found.{suggestion_text}'


# ─── Helpers ──────────────────────────────────────────────────────────────────


def _stem(key: str) -> str:
    """Filename of *key* without its extension."""
    return posixpath.splitext(posixpath.basename(key))[0]


def find_matching_keys(name: str, keys: list[str]) -> list[str]:
    """Keys containing *name*, or whose filename stem equals it (case-insensitive)."""
    needle = name.lower()
    return [
        key
        for key in keys
        if needle in key.lower() or _stem(key).lower() == needle
    ]


def find_similar_keys(name: str, keys: list[str], limit: int = MAX_SUGGESTIONS) -> list[str]:
    """Up to *limit* keys related to *name* by containment in either direction."""
    needle = name.lower()
    similar = [
        key
        for key in keys
        if needle in key.lower()
        or key.lower() in needle
        or needle in _stem(key).lower()
    ]
    return similar[:limit]
