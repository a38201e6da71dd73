"""Custom exceptions for docsite."""

from __future__ import annotations


class DocsiteError(Exception):
    """Base exception for docsite operations."""


class NotFoundError(DocsiteError):
    """Requested document or section does not exist."""


class ParseError(DocsiteError):
    """Error during content parsing."""


class FrontMatterError(ParseError):
    """Front matter block is not a valid YAML mapping."""


class InvalidDocumentError(DocsiteError):
    """Document cannot be turned into a usable record."""


class DocumentIOError(DocsiteError):
    """File-system read failure other than a missing file."""


class CompileError(DocsiteError):
    """Error while building the render tree for a document body.

    Attributes:
        line: 1-based line number of the offending fragment, if known.
        fragment: The source text that triggered the failure, if known.
    """

    def __init__(
        self, message: str, *, line: int | None = None, fragment: str | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.fragment = fragment

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} (line {self.line})"
