"""Pydantic response models for the docs API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from docsite.schemas import (
    Breadcrumb,
    CompiledDocument,
    Diagnostic,
    DocContent,
    DocFrontMatter,
    DocSection,
    DocumentRoute,
    SearchResult,
)


class DocumentSummary(BaseModel):
    """Listing entry for a document inside a section.

    Attributes
    ----------
    slug : str
        Document slug.
    title : str
        Display title.
    description : str | None
        Optional summary.
    tags : list[str]
        Document tags.
    reading_time : int
        Estimated reading time in minutes.
    word_count : int
        Number of words in the body.
    href : str
        Site path of the document page.

    """

    slug: str
    title: str
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    reading_time: int
    word_count: int
    href: str

    @classmethod
    def from_doc(cls, section: DocSection, doc: DocContent) -> DocumentSummary:
        return cls(
            slug=doc.slug,
            title=doc.front_matter.title,
            description=doc.front_matter.description,
            tags=list(doc.front_matter.tags),
            reading_time=doc.reading_time,
            word_count=doc.word_count,
            href=f"/docs/{section.path}/{doc.slug}",
        )


class SectionResponse(BaseModel):
    """A section with its published documents and nested subsections.

    Attributes
    ----------
    slug : str
        Section slug.
    path : str
        Slash-joined slug path from the top-level section.
    title : str
        Display title.
    description : str | None
        Optional section description.
    items : list[DocumentSummary]
        Published documents directly in the section.
    subsections : list[SectionResponse]
        Nested sections.

    """

    slug: str
    path: str
    title: str
    description: str | None = None
    items: list[DocumentSummary] = Field(default_factory=list)
    subsections: list["SectionResponse"] = Field(default_factory=list)

    @classmethod
    def from_section(cls, section: DocSection) -> SectionResponse:
        return cls(
            slug=section.slug,
            path=section.path,
            title=section.title,
            description=section.description,
            items=[
                DocumentSummary.from_doc(section, doc)
                for doc in section.items
                if doc.front_matter.published
            ],
            subsections=[cls.from_section(sub) for sub in section.subsections],
        )


class SectionsResponse(BaseModel):
    """All top-level sections."""

    sections: list[SectionResponse]


class DocumentResponse(BaseModel):
    """A document with its compiled render tree and navigation context.

    Attributes
    ----------
    section : str
        Section path the document lives in.
    slug : str
        Document slug.
    front_matter : DocFrontMatter
        Typed document metadata.
    reading_time : int
        Estimated reading time in minutes.
    word_count : int
        Number of words in the body.
    compiled : CompiledDocument
        Render tree, table of contents and HTML. ``compiled.error`` is set
        when the body failed to compile and an error panel is returned.
    previous : DocumentRoute | None
        Preceding published document.
    next : DocumentRoute | None
        Following published document.
    breadcrumbs : list[Breadcrumb]
        Trail from the docs index to this document.

    """

    section: str
    slug: str
    front_matter: DocFrontMatter
    reading_time: int
    word_count: int
    compiled: CompiledDocument
    previous: DocumentRoute | None = None
    next: DocumentRoute | None = None
    breadcrumbs: list[Breadcrumb] = Field(default_factory=list)


class RoutesResponse(BaseModel):
    """Every (section, document) pair, for static route generation."""

    routes: list[DocumentRoute]


class SearchResponse(BaseModel):
    """Search results in discovery order."""

    query: str
    results: list[SearchResult]


class RebuildResponse(BaseModel):
    """Outcome of a snapshot rebuild.

    Attributes
    ----------
    sections : int
        Number of top-level sections.
    documents : int
        Number of documents in the tree.
    diagnostics : list[Diagnostic]
        Files left out of the tree and why.

    """

    sections: int
    documents: int
    diagnostics: list[Diagnostic]


class ErrorResponse(BaseModel):
    """Error body returned with 4xx responses."""

    detail: str = Field(..., description="Error message")
