"""
search_filter.py — Server side of the article search
======================================================
The browser filters the rendered list itself (templates/_feed_search.js).
The server's part is to hand it a lowercase index per article, emitted as
data-* attributes, and the initial stats line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from feed_parser import ArticleRecord


@dataclass(frozen=True)
class ArticleIndexEntry:
    title: str
    description: str
    author: str


def build_index(articles: Sequence[ArticleRecord]) -> List[ArticleIndexEntry]:
    """One lowercase entry per article, in render order."""
    return [
        ArticleIndexEntry(
            title=a.title.lower(),
            description=a.description.lower(),
            author=a.author.lower(),
        )
        for a in articles
    ]


def status_message(query: str, matched: int, total: int) -> str:
    if not (query or "").lower().strip():
        return f"Showing all {total} articles"
    plural = "" if matched == 1 else "s"
    return f'Found {matched} article{plural} matching "{query}"'
