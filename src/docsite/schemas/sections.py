"""Section tree models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from docsite.schemas.documents import DocContent

DiagnosticKind = Literal["invalid_document", "io_error", "not_found"]


class DocSection(BaseModel):
    """A directory-derived node in the navigation tree."""

    model_config = ConfigDict(frozen=True)

    title: str
    slug: str
    path: str
    description: str | None = None
    items: tuple[DocContent, ...] = ()
    subsections: tuple["DocSection", ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.items and not self.subsections

    def find_item(self, slug: str) -> DocContent | None:
        """Return the direct item with ``slug``, if any."""
        for item in self.items:
            if item.slug == slug:
                return item
        return None

    def find_subsection(self, slug: str) -> DocSection | None:
        """Return the direct subsection with ``slug``, if any."""
        for subsection in self.subsections:
            if subsection.slug == slug:
                return subsection
        return None


class Diagnostic(BaseModel):
    """A file that was left out of the tree, and why."""

    model_config = ConfigDict(frozen=True)

    path: str
    kind: DiagnosticKind
    reason: str


class SectionTree(BaseModel):
    """Result of a tree build: the sections plus per-file diagnostics."""

    model_config = ConfigDict(frozen=True)

    sections: tuple[DocSection, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = Field(default_factory=tuple)
