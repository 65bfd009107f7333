"""
Shared Pydantic models for the content server.

Defines the two content categories served from the archive and the
user-facing wording each category's tools use.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Only these entries are read out of the archive
TEXT_EXTENSIONS: tuple[str, ...] = (".md", ".html")


class ContentCategory(str, Enum):
    """Which collection (and which search index) a document belongs to."""

    RECIPE = "recipe"
    DOC = "doc"

    @property
    def root_prefix(self) -> str:
        """Top-level archive folder holding this category."""
        return _ROOT_PREFIXES[self]

    @property
    def collection(self) -> str:
        """Plural slug used in tool names (list_recipes, search_docs)."""
        return "recipes" if self is ContentCategory.RECIPE else "docs"

    @property
    def labels(self) -> CategoryLabels:
        return _LABELS[self]


class CategoryLabels(BaseModel):
    """Wording of tool descriptions and result messages for one category."""

    model_config = ConfigDict(frozen=True)

    noun: str = Field(description="Singular noun, e.g. 'recipe'")
    noun_plural: str = Field(description="Plural noun, e.g. 'recipes'")
    list_title: str = Field(description="Noun used when listing everything")


class ContentItem(BaseModel):
    """A single text document loaded from the archive."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Archive-relative path, category root stripped")
    text: str = Field(description="Decoded document content")


_ROOT_PREFIXES: dict[ContentCategory, str] = {
    ContentCategory.RECIPE: "recipes/",
    ContentCategory.DOC: "api-docs/",
}

_LABELS: dict[ContentCategory, CategoryLabels] = {
    ContentCategory.RECIPE: CategoryLabels(
        noun="recipe", noun_plural="recipes", list_title="recipes"
    ),
    ContentCategory.DOC: CategoryLabels(
        noun="document", noun_plural="documents", list_title="documentation"
    ),
}
