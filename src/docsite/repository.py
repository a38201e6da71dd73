"""Immutable content snapshots and the process-wide snapshot cache."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

from docsite import navigation
from docsite.compiler import compile_document
from docsite.config import (
    DOCSITE_PRUNE_EMPTY_SECTIONS,
    DOCSITE_SEARCH_MAX_RESULTS,
    DOCSITE_WORDS_PER_MINUTE,
)
from docsite.schemas import (
    Breadcrumb,
    CompiledDocument,
    Diagnostic,
    DocContent,
    DocSection,
    DocumentRoute,
    SearchResult,
    SectionTree,
)
from docsite.search import search_documents, search_summaries
from docsite.sections import build_section_tree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentSnapshot:
    """A built section tree plus the lookups the rendering layer needs.

    Lookups return ``None`` for unknown sections or documents.
    """

    root: Path
    tree: SectionTree
    _compiled: dict[tuple[str, str], CompiledDocument] = field(
        default_factory=dict, repr=False, compare=False
    )
    _compile_lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    @classmethod
    def build(
        cls,
        root: str | Path,
        *,
        prune_empty: bool = DOCSITE_PRUNE_EMPTY_SECTIONS,
        words_per_minute: int = DOCSITE_WORDS_PER_MINUTE,
    ) -> ContentSnapshot:
        root = Path(root).expanduser().resolve()
        tree = build_section_tree(
            root, prune_empty=prune_empty, words_per_minute=words_per_minute
        )
        return cls(root=root, tree=tree)

    @property
    def sections(self) -> tuple[DocSection, ...]:
        return self.tree.sections

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return self.tree.diagnostics

    def get_section(self, section_path: str) -> DocSection | None:
        return navigation.find_section(self.sections, section_path)

    def get_document(self, section_path: str, document_slug: str) -> DocContent | None:
        section = self.get_section(section_path)
        if section is None:
            return None
        return section.find_item(document_slug)

    def compile(self, section_path: str, document_slug: str) -> CompiledDocument | None:
        """Compiled render tree for a document, memoised per snapshot."""
        doc = self.get_document(section_path, document_slug)
        if doc is None:
            return None
        key = (section_path.strip("/"), document_slug)
        with self._compile_lock:
            cached = self._compiled.get(key)
        if cached is not None:
            return cached
        compiled = compile_document(doc)
        with self._compile_lock:
            return self._compiled.setdefault(key, compiled)

    def document_routes(self, *, include_unpublished: bool = False) -> list[DocumentRoute]:
        return navigation.document_routes(self.sections, include_unpublished=include_unpublished)

    def adjacent(
        self, section_path: str, document_slug: str
    ) -> tuple[DocumentRoute | None, DocumentRoute | None]:
        return navigation.adjacent_documents(self.sections, section_path, document_slug)

    def breadcrumbs(self, section_path: str, document_slug: str | None = None) -> list[Breadcrumb]:
        return navigation.breadcrumbs(self.sections, section_path, document_slug)

    def search(self, query: str, *, limit: int | None = DOCSITE_SEARCH_MAX_RESULTS) -> list[DocContent]:
        return search_documents(self.sections, query, limit=limit)

    def search_summaries(
        self, query: str, *, limit: int | None = DOCSITE_SEARCH_MAX_RESULTS
    ) -> list[SearchResult]:
        return search_summaries(self.sections, query, limit=limit)

    def document_count(self) -> int:
        return sum(1 for _ in navigation.iter_documents(self.sections))


_snapshots: dict[Path, ContentSnapshot] = {}
_snapshots_lock = threading.Lock()


def get_snapshot(root: str | Path) -> ContentSnapshot:
    """Return the cached snapshot for ``root``, building it on first use."""
    key = Path(root).expanduser().resolve()
    with _snapshots_lock:
        snapshot = _snapshots.get(key)
    if snapshot is not None:
        return snapshot
    return rebuild_snapshot(key)


def rebuild_snapshot(root: str | Path) -> ContentSnapshot:
    """Build a fresh snapshot for ``root`` and swap it into the cache."""
    snapshot = ContentSnapshot.build(root)
    with _snapshots_lock:
        _snapshots[snapshot.root] = snapshot
    logger.info(
        "Built content snapshot for %s: %d sections, %d diagnostics",
        snapshot.root,
        len(snapshot.sections),
        len(snapshot.diagnostics),
    )
    return snapshot


def clear_snapshots() -> None:
    with _snapshots_lock:
        _snapshots.clear()
