"""Traversal helpers over a section tree: routes, prev/next and breadcrumbs."""

from __future__ import annotations

from typing import Iterable, Iterator

from docsite.schemas import Breadcrumb, DocContent, DocSection, DocumentRoute

DOCS_ROOT_HREF = "/docs"


def iter_sections(sections: Iterable[DocSection]) -> Iterator[DocSection]:
    """Yield every section depth-first, parents before their subsections."""
    for section in sections:
        yield section
        yield from iter_sections(section.subsections)


def iter_documents(sections: Iterable[DocSection]) -> Iterator[tuple[DocSection, DocContent]]:
    """Yield ``(section, document)`` pairs in discovery order.

    Each section's own items come first, then its subsections depth-first.
    """
    for section in iter_sections(sections):
        for item in section.items:
            yield section, item


def find_section(sections: Iterable[DocSection], section_path: str) -> DocSection | None:
    """Resolve a slash-separated slug path such as ``web-development/frontend``."""
    parts = [part for part in section_path.strip("/").split("/") if part]
    if not parts:
        return None

    current: DocSection | None = None
    candidates = tuple(sections)
    for part in parts:
        current = next((section for section in candidates if section.slug == part), None)
        if current is None:
            return None
        candidates = current.subsections
    return current


def document_routes(
    sections: Iterable[DocSection], *, include_unpublished: bool = False
) -> list[DocumentRoute]:
    """List every resolvable ``(section, document)`` pair for static routing."""
    return [
        DocumentRoute(section=section.path, document=doc.slug, title=doc.front_matter.title)
        for section, doc in iter_documents(sections)
        if include_unpublished or doc.front_matter.published
    ]


def adjacent_documents(
    sections: Iterable[DocSection], section_path: str, document_slug: str
) -> tuple[DocumentRoute | None, DocumentRoute | None]:
    """Return the published documents before and after the given one."""
    routes = document_routes(sections)
    section_path = section_path.strip("/")
    for index, route in enumerate(routes):
        if route.section == section_path and route.document == document_slug:
            previous = routes[index - 1] if index > 0 else None
            following = routes[index + 1] if index + 1 < len(routes) else None
            return previous, following
    return None, None


def breadcrumbs(
    sections: Iterable[DocSection], section_path: str, document_slug: str | None = None
) -> list[Breadcrumb]:
    """Build the trail from the docs index down to a section or document.

    An unknown section or document yields an empty trail.
    """
    sections = tuple(sections)
    trail = [Breadcrumb(title="Docs", href=DOCS_ROOT_HREF)]
    parts = [part for part in section_path.strip("/").split("/") if part]
    section: DocSection | None = None
    for depth in range(1, len(parts) + 1):
        prefix = "/".join(parts[:depth])
        section = find_section(sections, prefix)
        if section is None:
            return []
        trail.append(Breadcrumb(title=section.title, href=f"{DOCS_ROOT_HREF}/{prefix}"))

    if document_slug is not None:
        doc = section.find_item(document_slug) if section is not None else None
        if doc is None:
            return []
        trail.append(
            Breadcrumb(
                title=doc.front_matter.title,
                href=f"{DOCS_ROOT_HREF}/{section.path}/{doc.slug}",
            )
        )
    return trail
