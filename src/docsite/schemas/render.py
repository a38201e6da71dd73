"""Render tree models produced by the content compiler."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RenderNode(BaseModel):
    """One node of a compiled document.

    Element nodes carry ``tag``, ``attrs`` and ``children``; text nodes carry
    only ``text``.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["element", "text"]
    tag: str | None = None
    attrs: dict[str, str] = Field(default_factory=dict)
    text: str | None = None
    children: tuple["RenderNode", ...] = ()


class TocEntry(BaseModel):
    """A heading listed in a document's table of contents."""

    model_config = ConfigDict(frozen=True)

    level: int = Field(..., ge=1, le=6)
    title: str
    anchor: str


class CompileErrorInfo(BaseModel):
    """Serializable details of a failed compilation."""

    model_config = ConfigDict(frozen=True)

    message: str
    line: int | None = None
    fragment: str | None = None


class CompiledDocument(BaseModel):
    """Compiled output for one document body."""

    model_config = ConfigDict(frozen=True)

    nodes: tuple[RenderNode, ...] = ()
    toc: tuple[TocEntry, ...] = ()
    html: str = ""
    error: CompileErrorInfo | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
