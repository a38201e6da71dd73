"""Tests for section tree construction."""

from __future__ import annotations

from pathlib import Path

import pytest

from docsite.sections import build_section_tree, humanize_slug, section_slug


class TestBuildSectionTree:
    """Tests for build_section_tree function."""

    def test_only_prefixed_directories_are_sections(self, content_root: Path) -> None:
        """README.md and unprefixed directories at the root are ignored."""
        (content_root / "assets").mkdir()
        (content_root / "assets" / "notes.md").write_text("x", encoding="utf-8")

        tree = build_section_tree(content_root)

        assert [section.slug for section in tree.sections] == ["intro", "web-development"]

    def test_section_title_and_slug(self, content_root: Path) -> None:
        """Slug drops the numeric prefix and the title is humanised."""
        tree = build_section_tree(content_root)

        web = tree.sections[1]
        assert web.slug == "web-development"
        assert web.title == "Web Development"
        assert web.path == "web-development"

    def test_items_sorted_by_order_then_slug(self, content_root: Path) -> None:
        """Scenario: overview (order 0) comes before advanced (order 1)."""
        tree = build_section_tree(content_root)

        intro = tree.sections[0]
        assert [doc.slug for doc in intro.items] == ["overview", "advanced"]

    def test_order_ties_break_on_slug(self, write_doc, tmp_path: Path) -> None:
        """Orders [2, 0, 1] with slugs [c, a, b] sort to a, b, c."""
        write_doc("01-s/c.md", order=2)
        write_doc("01-s/a.md", order=0)
        write_doc("01-s/b.md", order=1)
        write_doc("01-s/aa.md", order=1)

        tree = build_section_tree(tmp_path)

        assert [doc.slug for doc in tree.sections[0].items] == ["a", "aa", "b", "c"]

    def test_fractional_order_sorts_between_integers(self, write_doc, tmp_path: Path) -> None:
        write_doc("01-s/two.md", order=2)
        write_doc("01-s/half.md", order=1.5)
        write_doc("01-s/one.md", order=1)

        tree = build_section_tree(tmp_path)

        assert [doc.slug for doc in tree.sections[0].items] == ["one", "half", "two"]

    def test_duplicate_top_level_section_slug(self, write_doc, tmp_path: Path) -> None:
        """01-guide and 02-guide share a slug; the first directory wins."""
        write_doc("01-guide/a.md")
        write_doc("02-guide/b.md")

        tree = build_section_tree(tmp_path)

        assert [section.slug for section in tree.sections] == ["guide"]
        assert [doc.slug for doc in tree.sections[0].items] == ["a"]
        assert [(Path(d.path).name, d.kind) for d in tree.diagnostics] == [("02-guide", "invalid_document")]

    def test_duplicate_subsection_slug(self, write_doc, tmp_path: Path) -> None:
        """backend and 01-backend under one section keep only the first by name."""
        write_doc("01-web/01-backend/first.md")
        write_doc("01-web/backend/second.md")

        tree = build_section_tree(tmp_path)

        (subsection,) = tree.sections[0].subsections
        assert [doc.slug for doc in subsection.items] == ["first"]
        assert "Duplicate section slug" in tree.diagnostics[0].reason

    def test_top_level_sections_sorted_by_slug(self, write_doc, tmp_path: Path) -> None:
        """Sections are ordered by stripped slug, not by prefix."""
        write_doc("01-zebra/doc.md")
        write_doc("02-apple/doc.md")

        tree = build_section_tree(tmp_path)

        assert [section.slug for section in tree.sections] == ["apple", "zebra"]

    def test_nested_subsections(self, content_root: Path, write_doc) -> None:
        """Child directories of any name become subsections."""
        write_doc("02-web-development/backend/orm/sqlalchemy.md", title="SQLAlchemy")
        write_doc("02-web-development/api/rest.md", title="REST")

        tree = build_section_tree(content_root)

        web = tree.sections[1]
        assert [sub.slug for sub in web.subsections] == ["api", "backend"]
        backend = web.subsections[1]
        assert backend.path == "web-development/backend"
        assert [doc.slug for doc in backend.items] == ["databases"]
        assert backend.subsections[0].path == "web-development/backend/orm"

    def test_empty_directories_are_pruned(self, content_root: Path) -> None:
        """Sections without documents anywhere beneath them are dropped."""
        (content_root / "03-empty" / "nested" / "deeper").mkdir(parents=True)
        (content_root / "01-intro" / "images").mkdir()

        tree = build_section_tree(content_root)

        assert "empty" not in [section.slug for section in tree.sections]
        assert tree.sections[0].subsections == ()

    def test_empty_directories_kept_when_not_pruning(self, content_root: Path) -> None:
        """With prune_empty=False, empty sections remain as empty nodes."""
        (content_root / "03-empty" / "nested").mkdir(parents=True)

        tree = build_section_tree(content_root, prune_empty=False)

        assert [section.slug for section in tree.sections] == ["empty", "intro", "web-development"]
        empty = tree.sections[0]
        assert empty.items == ()
        assert empty.subsections[0].is_empty

    def test_malformed_file_becomes_diagnostic(self, write_doc, tmp_path: Path) -> None:
        """One bad file is skipped and reported while the rest builds."""
        write_doc("01-guide/first.md", title="First")
        write_doc("01-guide/second.md", title="Second")
        bad = tmp_path / "01-guide" / "broken.md"
        bad.write_text("---\ntags: [unterminated\n---\nBody\n", encoding="utf-8")

        tree = build_section_tree(tmp_path)

        assert [doc.slug for doc in tree.sections[0].items] == ["first", "second"]
        assert len(tree.diagnostics) == 1
        diagnostic = tree.diagnostics[0]
        assert diagnostic.kind == "invalid_document"
        assert diagnostic.path == str(bad)

    def test_duplicate_slug_across_extensions(self, write_doc, tmp_path: Path) -> None:
        """A .md and .mdx with the same name keep the first and report the second."""
        write_doc("01-guide/page.md", title="Markdown")
        write_doc("01-guide/page.mdx", title="MDX")

        tree = build_section_tree(tmp_path)

        assert [doc.front_matter.title for doc in tree.sections[0].items] == ["Markdown"]
        assert tree.diagnostics[0].reason.startswith("Duplicate slug")

    def test_hidden_entries_are_skipped(self, write_doc, tmp_path: Path) -> None:
        """Dot files and dot directories are not content."""
        write_doc("01-guide/visible.md")
        write_doc("01-guide/.hidden.md")
        write_doc("01-guide/.cache/cached.md")

        tree = build_section_tree(tmp_path)

        section = tree.sections[0]
        assert [doc.slug for doc in section.items] == ["visible"]
        assert section.subsections == ()

    def test_section_metadata_file(self, write_doc, tmp_path: Path) -> None:
        """_section.yaml overrides the title and sets a description."""
        write_doc("01-ai-tools/cursor.md")
        (tmp_path / "01-ai-tools" / "_section.yaml").write_text(
            "title: AI Tools\ndescription: Editors and assistants\n", encoding="utf-8"
        )

        section = build_section_tree(tmp_path).sections[0]

        assert section.title == "AI Tools"
        assert section.description == "Editors and assistants"

    def test_missing_root_returns_empty_tree(self, tmp_path: Path) -> None:
        """A missing root is reported, not raised."""
        tree = build_section_tree(tmp_path / "missing")

        assert tree.sections == ()
        assert tree.diagnostics[0].kind == "not_found"

    def test_build_is_idempotent(self, content_root: Path) -> None:
        """Two builds of the same directory are structurally equal."""
        assert build_section_tree(content_root) == build_section_tree(content_root)

    def test_unpublished_documents_are_loaded(self, content_root: Path) -> None:
        """The builder keeps unpublished documents; listings filter them."""
        web = build_section_tree(content_root).sections[1]

        drafts = web.find_item("drafts")
        assert drafts is not None
        assert drafts.front_matter.published is False


class TestSlugHelpers:
    """Tests for section naming helpers."""

    @pytest.mark.parametrize(
        ("name", "slug"),
        [
            ("04-web-development", "web-development"),
            ("backend", "backend"),
            ("2024-notes", "2024-notes"),
            ("10-", ""),
        ],
    )
    def test_section_slug(self, name: str, slug: str) -> None:
        assert section_slug(name) == slug

    def test_humanize_slug(self) -> None:
        assert humanize_slug("context-engineering") == "Context Engineering"
