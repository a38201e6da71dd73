"""Inspect a content directory: section tree, diagnostics, search and compiled tags."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path
from typing import Iterable

from docsite.repository import ContentSnapshot
from docsite.schemas import DocSection, RenderNode
from docsite.utils.logging_config import configure_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect a docs content tree.")
    parser.add_argument("root", help="Content root containing NN-<slug> section directories")
    parser.add_argument("--search", help="Run a search query against the corpus")
    parser.add_argument("--compile", metavar="SECTION/DOCUMENT", help="Compile one document and count its tags")
    parser.add_argument("--keep-empty", action="store_true", help="Keep sections without documents")
    parser.add_argument("--log-level", default="WARNING", help="Logging level for build warnings")
    args = parser.parse_args()
    configure_logging(args.log_level.upper())

    root = Path(args.root)
    if not root.is_dir():
        parser.error(f"Content root not found: {root}")

    snapshot = ContentSnapshot.build(root, prune_empty=not args.keep_empty)

    print("Sections:")
    print_sections(snapshot.sections)

    if snapshot.diagnostics:
        print("\nDiagnostics:")
        for diagnostic in snapshot.diagnostics:
            print(f"{diagnostic.kind}: {diagnostic.path}: {diagnostic.reason}")

    if args.search is not None:
        print(f"\nSearch {args.search!r}:")
        for result in snapshot.search_summaries(args.search, limit=None):
            print(f"{result.href}  {result.title}")

    if args.compile:
        section_path, _, document = args.compile.rpartition("/")
        compiled = snapshot.compile(section_path, document)
        if compiled is None:
            parser.error(f"Document not found: {args.compile}")
        if compiled.error is not None:
            print(f"\nCompile error: {compiled.error.message} (line {compiled.error.line})")
        print("\nTags:")
        for name, count in count_tags(compiled.nodes).most_common():
            print(f"{name}: {count}")
        print("\nContents:")
        for entry in compiled.toc:
            print("  " * (entry.level - 1) + f"{entry.title} (#{entry.anchor})")


def print_sections(sections: Iterable[DocSection], indent: int = 0) -> None:
    for section in sections:
        print(" " * (indent * 4) + f"{section.title} [{section.path}]")
        for doc in section.items:
            hidden = "" if doc.front_matter.published else " (unpublished)"
            print(
                " " * ((indent + 1) * 4)
                + f"- {doc.slug}: {doc.front_matter.title}, {doc.reading_time} min{hidden}"
            )
        print_sections(section.subsections, indent + 1)


def count_tags(nodes: Iterable[RenderNode]) -> Counter:
    tags = Counter()
    for node in nodes:
        if node.type == "element":
            tags[node.tag] += 1
            tags.update(count_tags(node.children))
    return tags


if __name__ == "__main__":
    main()
