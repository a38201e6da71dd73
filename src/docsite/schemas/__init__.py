"""Shared schemas for docsite."""

from docsite.schemas.documents import DocContent, DocFrontMatter
from docsite.schemas.navigation import Breadcrumb, DocumentRoute, SearchResult
from docsite.schemas.render import CompiledDocument, CompileErrorInfo, RenderNode, TocEntry
from docsite.schemas.sections import Diagnostic, DocSection, SectionTree

__all__ = [
    "Breadcrumb",
    "CompileErrorInfo",
    "CompiledDocument",
    "Diagnostic",
    "DocContent",
    "DocFrontMatter",
    "DocSection",
    "DocumentRoute",
    "RenderNode",
    "SearchResult",
    "SectionTree",
    "TocEntry",
]
