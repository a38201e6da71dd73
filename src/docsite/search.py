"""Case-insensitive substring search over a section tree."""

from __future__ import annotations

from itertools import islice
from typing import Iterable, Iterator

from docsite.navigation import DOCS_ROOT_HREF, iter_documents
from docsite.schemas import DocContent, DocSection, SearchResult


def matches_query(doc: DocContent, needle: str) -> bool:
    """Check title, description and body for ``needle`` (already casefolded)."""
    front_matter = doc.front_matter
    fields = (front_matter.title, front_matter.description or "", doc.content)
    return any(needle in field.casefold() for field in fields)


def _iter_matches(
    sections: Iterable[DocSection], query: str, *, include_unpublished: bool
) -> Iterator[tuple[DocSection, DocContent]]:
    if not query.strip():
        return
    needle = query.casefold()
    for section, doc in iter_documents(sections):
        if not include_unpublished and not doc.front_matter.published:
            continue
        if matches_query(doc, needle):
            yield section, doc


def search_documents(
    sections: Iterable[DocSection],
    query: str,
    *,
    limit: int | None = None,
    include_unpublished: bool = False,
) -> list[DocContent]:
    """Return documents containing ``query`` in discovery order.

    Args:
        sections: Top-level sections of the tree.
        query: Free text; matched as a case-insensitive substring. Blank
            queries match nothing.
        limit: Keep at most this many results, preserving order.
        include_unpublished: Also search documents with ``published: false``.
    """
    matches = _iter_matches(sections, query, include_unpublished=include_unpublished)
    return [doc for _, doc in islice(matches, limit)]


def search_summaries(
    sections: Iterable[DocSection],
    query: str,
    *,
    limit: int | None = None,
    include_unpublished: bool = False,
) -> list[SearchResult]:
    """Like ``search_documents`` but returns listing summaries."""
    matches = _iter_matches(sections, query, include_unpublished=include_unpublished)
    return [
        SearchResult(
            slug=doc.slug,
            section=section.path,
            title=doc.front_matter.title,
            description=doc.front_matter.description,
            tags=doc.front_matter.tags,
            href=f"{DOCS_ROOT_HREF}/{section.path}/{doc.slug}",
        )
        for section, doc in islice(matches, limit)
    ]
