"""Load markdown files from disk into ``DocContent`` records."""

from __future__ import annotations

import math
from pathlib import Path

from pydantic import ValidationError

from docsite.config import DOCSITE_WORDS_PER_MINUTE, MARKDOWN_EXTENSIONS
from docsite.exceptions import (
    DocumentIOError,
    FrontMatterError,
    InvalidDocumentError,
    NotFoundError,
)
from docsite.front_matter import parse_front_matter
from docsite.schemas import DocContent, DocFrontMatter


def slug_for_file(path: Path) -> str:
    """Return the file name with its markdown extension stripped."""
    name = path.name
    for extension in MARKDOWN_EXTENSIONS:
        if name.lower().endswith(extension):
            return name[: -len(extension)]
    return path.stem


def is_markdown_file(path: Path) -> bool:
    return path.name.lower().endswith(MARKDOWN_EXTENSIONS)


def count_words(body: str) -> int:
    """Count whitespace-delimited tokens."""
    return len(body.split())


def reading_time_minutes(word_count: int, words_per_minute: int = DOCSITE_WORDS_PER_MINUTE) -> int:
    """Minutes needed to read ``word_count`` words, never less than one."""
    return max(1, math.ceil(word_count / words_per_minute))


def load_document(
    path: str | Path, *, words_per_minute: int = DOCSITE_WORDS_PER_MINUTE
) -> DocContent:
    """Read a markdown file and build its ``DocContent``.

    Args:
        path: Path to a ``.md`` or ``.mdx`` file.
        words_per_minute: Reading speed used for ``reading_time``.

    Returns:
        The loaded document.

    Raises:
        NotFoundError: If ``path`` does not exist.
        InvalidDocumentError: If the slug is empty, the file is not markdown
            or not UTF-8, or its front matter is unusable.
        DocumentIOError: If the file exists but cannot be read.
    """
    path = Path(path)
    if not path.exists():
        raise NotFoundError(f"Document not found: {path}")
    if not is_markdown_file(path):
        raise InvalidDocumentError(f"Not a markdown file: {path}")

    slug = slug_for_file(path)
    if not slug.strip():
        raise InvalidDocumentError(f"Document has an empty slug: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidDocumentError(f"Document is not valid UTF-8: {path}") from exc
    except FileNotFoundError as exc:
        raise NotFoundError(f"Document not found: {path}") from exc
    except OSError as exc:
        raise DocumentIOError(f"Cannot read {path}: {exc.strerror or exc}") from exc

    try:
        metadata, body = parse_front_matter(raw)
    except FrontMatterError as exc:
        raise InvalidDocumentError(f"{path}: {exc}") from exc

    title = metadata.get("title")
    if title is None or (isinstance(title, str) and not title.strip()):
        metadata["title"] = slug.replace("-", " ")

    try:
        front_matter = DocFrontMatter.model_validate(metadata)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in exc.errors())
        raise InvalidDocumentError(f"{path}: invalid front matter ({fields})") from exc

    word_count = count_words(body)
    return DocContent(
        slug=slug,
        front_matter=front_matter,
        content=body,
        reading_time=reading_time_minutes(word_count, words_per_minute),
        word_count=word_count,
        source_path=path,
    )
