"""Routing, navigation and search result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DocumentRoute(BaseModel):
    """A resolvable (section, document) pair."""

    model_config = ConfigDict(frozen=True)

    section: str
    document: str
    title: str

    @property
    def href(self) -> str:
        return f"/docs/{self.section}/{self.document}"


class Breadcrumb(BaseModel):
    """One step of a breadcrumb trail."""

    model_config = ConfigDict(frozen=True)

    title: str
    href: str


class SearchResult(BaseModel):
    """Summary of a document matching a search query."""

    model_config = ConfigDict(frozen=True)

    slug: str
    section: str
    title: str
    description: str | None = None
    tags: tuple[str, ...] = ()
    href: str
