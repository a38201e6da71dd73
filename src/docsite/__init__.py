"""docsite: build a navigable, searchable documentation corpus from markdown."""

from docsite.compiler import compile_content, compile_document
from docsite.exceptions import (
    CompileError,
    DocsiteError,
    DocumentIOError,
    FrontMatterError,
    InvalidDocumentError,
    NotFoundError,
    ParseError,
)
from docsite.front_matter import parse_front_matter
from docsite.loader import load_document
from docsite.repository import ContentSnapshot, clear_snapshots, get_snapshot, rebuild_snapshot
from docsite.schemas import (
    CompiledDocument,
    DocContent,
    DocFrontMatter,
    DocSection,
    SearchResult,
    SectionTree,
)
from docsite.search import search_documents, search_summaries
from docsite.sections import build_section_tree

__all__ = [
    "CompileError",
    "CompiledDocument",
    "ContentSnapshot",
    "DocContent",
    "DocFrontMatter",
    "DocSection",
    "DocsiteError",
    "DocumentIOError",
    "FrontMatterError",
    "InvalidDocumentError",
    "NotFoundError",
    "ParseError",
    "SearchResult",
    "SectionTree",
    "build_section_tree",
    "clear_snapshots",
    "compile_content",
    "compile_document",
    "get_snapshot",
    "load_document",
    "parse_front_matter",
    "rebuild_snapshot",
    "search_documents",
    "search_summaries",
]
