"""
Per-category search corpus.

Builds a BM25 index over ``"{path} {text}"`` for every document of a
category. The index scores documents by position, so the corpus keeps a
parallel list of paths in exactly the order the index was built from.
"""

from __future__ import annotations

import logging
import re
from typing import Final

from pydantic import BaseModel
from rank_bm25 import BM25Plus

from content_server.content_types import ContentCategory, ContentItem

# ─── Constants ────────────────────────────────────────────────────────────────

DEFAULT_TOP_K: Final[int] = 5

_TOKEN_RE = re.compile(r"[a-z0-9]+")

_logger = logging.getLogger("content.corpus")


def tokenize(text: str) -> list[str]:
    """Lowercase alphanumeric tokens of *text*."""
    return _TOKEN_RE.findall(text.lower())


class SearchHit(BaseModel):
    """A ranked search result."""

    path: str
    score: float


# ─── Corpus ───────────────────────────────────────────────────────────────────


class Corpus:
    """The ordered documents of one category together with their index."""

    def __init__(self, category: ContentCategory, documents: dict[str, str]) -> None:
        self.category = category
        self.items: list[ContentItem] = [
            ContentItem(path=path, text=text) for path, text in documents.items()
        ]
        self.paths: list[str] = [item.path for item in self.items]
        self._by_path: dict[str, ContentItem] = {item.path: item for item in self.items}
        self._tokens: list[list[str]] = []
        self.index: BM25Plus | None = None

        if self.items:
            self._tokens = [tokenize(f"{item.path} {item.text}") for item in self.items]
            self.index = BM25Plus(self._tokens)
            _logger.info("Indexed %d %s", len(self.items), category.collection)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_indexed(self) -> bool:
        return self.index is not None

    def keys(self) -> list[str]:
        return list(self.paths)

    def get(self, path: str) -> str | None:
        item = self._by_path.get(path)
        return item.text if item is not None else None

    def search(self, query: str, top_k: int = DEFAULT_TOP_K) -> list[SearchHit]:
        """
        Rank documents against *query* and return the best *top_k*.

        Only documents containing at least one query token are ranked.
        Equal scores keep corpus order, so repeated queries return the
        same list.
        """
        if self.index is None:
            raise RuntimeError(f"No search index for {self.category.collection}")

        query_tokens = tokenize(query)
        if not query_tokens:
            return []

        wanted = set(query_tokens)
        scores = self.index.get_scores(query_tokens)
        matching = [
            i for i, tokens in enumerate(self._tokens) if wanted.intersection(tokens)
        ]
        matching.sort(key=lambda i: (-scores[i], i))

        return [
            SearchHit(path=self.paths[i], score=float(scores[i]))
            for i in matching[:top_k]
        ]


def build_corpora(
    collections: dict[ContentCategory, dict[str, str]],
) -> dict[ContentCategory, Corpus]:
    """Build one corpus per category from the loaded archive collections."""
    return {
        category: Corpus(category, collections.get(category, {}))
        for category in ContentCategory
    }
