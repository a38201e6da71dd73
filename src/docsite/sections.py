"""Build the section tree from a content directory."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from docsite.config import (
    DOCSITE_PRUNE_EMPTY_SECTIONS,
    DOCSITE_WORDS_PER_MINUTE,
    SECTION_METADATA_FILE,
)
from docsite.exceptions import DocumentIOError, InvalidDocumentError, NotFoundError
from docsite.loader import is_markdown_file, load_document
from docsite.schemas import Diagnostic, DocContent, DocSection, SectionTree

logger = logging.getLogger(__name__)

_SECTION_PREFIX_RE = re.compile(r"^\d{2}-")


def is_section_dir_name(name: str) -> bool:
    """Top-level sections are named ``NN-<slug>``."""
    return bool(_SECTION_PREFIX_RE.match(name))


def section_slug(dir_name: str) -> str:
    """Strip a leading two-digit ordering prefix from a directory name."""
    return _SECTION_PREFIX_RE.sub("", dir_name, count=1)


def humanize_slug(slug: str) -> str:
    """Turn ``web-development`` into ``Web Development``."""
    words = slug.replace("-", " ").split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def sort_documents(items: list[DocContent]) -> list[DocContent]:
    """Order sibling documents by ``(order, slug)``."""
    return sorted(items, key=lambda doc: (doc.front_matter.order, doc.slug))


def build_section_tree(
    root: str | Path,
    *,
    prune_empty: bool = DOCSITE_PRUNE_EMPTY_SECTIONS,
    words_per_minute: int = DOCSITE_WORDS_PER_MINUTE,
) -> SectionTree:
    """Walk ``root`` and assemble its top-level sections.

    Only ``NN-<slug>`` directories directly under ``root`` become sections.
    Below them every directory is a candidate subsection. Files that fail to
    load are left out and reported in ``SectionTree.diagnostics``.

    Args:
        root: Content root directory.
        prune_empty: Drop sections with no documents anywhere beneath them.
            Applies at every depth.
        words_per_minute: Reading speed passed to the loader.
    """
    root = Path(root)
    builder = _TreeBuilder(prune_empty=prune_empty, words_per_minute=words_per_minute)

    if not root.is_dir():
        logger.warning("Content root not found: %s", root)
        builder.report(root, "not_found", "Content root does not exist")
        return SectionTree(diagnostics=tuple(builder.diagnostics))

    sections: list[DocSection] = []
    for entry in builder.list_dir(root) or []:
        if not is_section_dir_name(entry.name) or not _is_plain_dir(entry):
            continue
        section = builder.build(entry, parent_path="")
        if section is not None and builder.claim_section_slug(sections, section, entry):
            sections.append(section)

    sections.sort(key=lambda section: section.slug)
    logger.debug(
        "Built %d sections from %s with %d diagnostics",
        len(sections),
        root,
        len(builder.diagnostics),
    )
    return SectionTree(sections=tuple(sections), diagnostics=tuple(builder.diagnostics))


class _TreeBuilder:
    def __init__(self, *, prune_empty: bool, words_per_minute: int) -> None:
        self.prune_empty = prune_empty
        self.words_per_minute = words_per_minute
        self.diagnostics: list[Diagnostic] = []

    def report(self, path: Path, kind: str, reason: str) -> None:
        self.diagnostics.append(Diagnostic(path=str(path), kind=kind, reason=reason))

    def list_dir(self, directory: Path) -> list[Path] | None:
        try:
            return sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError as exc:
            logger.warning("Cannot list %s: %s", directory, exc)
            self.report(directory, "io_error", f"Cannot list directory: {exc.strerror or exc}")
            return None

    def claim_section_slug(self, siblings: list[DocSection], section: DocSection, directory: Path) -> bool:
        """Keep the first directory for a slug; report later ones."""
        if any(sibling.slug == section.slug for sibling in siblings):
            logger.warning("Duplicate section slug %r at %s", section.slug, directory)
            self.report(directory, "invalid_document", f"Duplicate section slug {section.slug!r}")
            return False
        return True

    def build(self, directory: Path, *, parent_path: str) -> DocSection | None:
        entries = self.list_dir(directory)
        if entries is None:
            return None

        slug = section_slug(directory.name)
        path = f"{parent_path}/{slug}" if parent_path else slug
        metadata = self._section_metadata(directory)

        items: list[DocContent] = []
        seen_slugs: set[str] = set()
        subsections: list[DocSection] = []

        for entry in entries:
            if entry.name.startswith("."):
                continue
            if entry.is_dir():
                if not _is_plain_dir(entry):
                    continue
                subsection = self.build(entry, parent_path=path)
                if subsection is not None and self.claim_section_slug(subsections, subsection, entry):
                    subsections.append(subsection)
            elif entry.is_file() and is_markdown_file(entry):
                doc = self._load(entry)
                if doc is None:
                    continue
                if doc.slug in seen_slugs:
                    logger.warning("Duplicate document slug %r in %s", doc.slug, directory)
                    self.report(entry, "invalid_document", f"Duplicate slug {doc.slug!r} in section")
                    continue
                seen_slugs.add(doc.slug)
                items.append(doc)

        if self.prune_empty and not items and not subsections:
            logger.debug("Pruning empty section %s", directory)
            return None

        return DocSection(
            title=str(metadata.get("title") or humanize_slug(slug)),
            slug=slug,
            path=path,
            description=metadata.get("description"),
            items=tuple(sort_documents(items)),
            subsections=tuple(sorted(subsections, key=lambda section: section.slug)),
        )

    def _load(self, path: Path) -> DocContent | None:
        try:
            return load_document(path, words_per_minute=self.words_per_minute)
        except InvalidDocumentError as exc:
            logger.warning("Skipping invalid document %s: %s", path, exc)
            self.report(path, "invalid_document", str(exc))
        except DocumentIOError as exc:
            logger.warning("Skipping unreadable document %s: %s", path, exc)
            self.report(path, "io_error", str(exc))
        except NotFoundError as exc:
            # Removed between listing and reading.
            logger.warning("Document disappeared during build %s: %s", path, exc)
            self.report(path, "not_found", str(exc))
        return None

    def _section_metadata(self, directory: Path) -> dict[str, Any]:
        meta_path = directory / SECTION_METADATA_FILE
        if not meta_path.is_file():
            return {}
        try:
            data = yaml.safe_load(meta_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
            logger.warning("Ignoring section metadata %s: %s", meta_path, exc)
            self.report(meta_path, "invalid_document", f"Unreadable section metadata: {exc}")
            return {}
        if data is None:
            return {}
        if not isinstance(data, dict):
            self.report(meta_path, "invalid_document", "Section metadata must be a mapping")
            return {}
        description = data.get("description")
        return {
            "title": data.get("title"),
            "description": str(description) if description is not None else None,
        }


def _is_plain_dir(path: Path) -> bool:
    # Symlinked directories are skipped so the tree cannot loop.
    return path.is_dir() and not path.is_symlink()
