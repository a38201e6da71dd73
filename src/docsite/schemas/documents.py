"""Document models."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DocFrontMatter(BaseModel):
    """Typed view over a document's front matter.

    Keys the record does not declare are dropped; the raw mapping returned by
    the parser still carries them.

    Attributes:
        title: Display title; the loader fills in a slug-derived default.
        description: Short summary shown in listings and search results.
        date: ISO date string, informational only.
        author: Free-form author name.
        tags: Tags in declaration order.
        order: Sort key among sibling documents.
        published: False hides the document from listings and search.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = Field(..., min_length=1)
    description: str | None = None
    date: str | None = None
    author: str | None = None
    tags: tuple[str, ...] = ()
    order: int | float = 0
    published: bool = True

    @field_validator("title", "description", "author", mode="before")
    @classmethod
    def coerce_scalar_text(cls, v: object) -> object:
        """Render YAML scalars such as numbers, dates and booleans as text."""
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, (int, float)):
            return str(v)
        if isinstance(v, (date, datetime)):
            return v.isoformat()
        return v

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v: object) -> object:
        """Accept YAML dates and datetimes as ISO strings."""
        if isinstance(v, datetime):
            return v.isoformat()
        if isinstance(v, date):
            return v.isoformat()
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: object) -> object:
        """Normalize tags from comma-separated strings or lists of scalars."""
        if v is None:
            return ()
        if isinstance(v, str):
            return tuple(item.strip() for item in v.split(",") if item.strip())
        if isinstance(v, (list, tuple)):
            tags: list[str] = []
            for item in v:
                if isinstance(item, (dict, list, tuple)) or item is None:
                    err = f"tags must be scalar values, got {item!r}"
                    raise ValueError(err)
                tags.append(str(item).strip())
            return tuple(tag for tag in tags if tag)
        err = f"tags must be a list of strings, got {type(v).__name__}"
        raise ValueError(err)

    @field_validator("order", mode="before")
    @classmethod
    def default_order(cls, v: object) -> object:
        if v is None:
            return 0
        if isinstance(v, bool):
            err = "order must be a number"
            raise ValueError(err)
        return v

    @field_validator("published", mode="before")
    @classmethod
    def default_published(cls, v: object) -> object:
        if v is None:
            return True
        return v


class DocContent(BaseModel):
    """A loaded markdown document.

    Attributes:
        slug: File name without its markdown extension.
        front_matter: Typed metadata.
        content: Raw markdown/MDX body with the front matter stripped.
        reading_time: Estimated minutes to read, at least 1.
        word_count: Number of whitespace-delimited tokens in the body.
        source_path: File the document was loaded from.
    """

    model_config = ConfigDict(frozen=True)

    slug: str = Field(..., min_length=1)
    front_matter: DocFrontMatter
    content: str
    reading_time: int = Field(..., ge=1)
    word_count: int = Field(..., ge=0)
    source_path: Path | None = None

    @property
    def title(self) -> str:
        return self.front_matter.title

    @property
    def description(self) -> str | None:
        return self.front_matter.description

    @property
    def published(self) -> bool:
        return self.front_matter.published
