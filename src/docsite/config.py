"""Local configuration for docsite."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_CONTENT_DIR = "docs"
DEFAULT_WORDS_PER_MINUTE = 200
DEFAULT_SEARCH_MAX_RESULTS = 50
DEFAULT_LOG_LEVEL = "INFO"

MARKDOWN_EXTENSIONS = (".md", ".mdx")
SECTION_METADATA_FILE = "_section.yaml"


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# Root of the markdown tree; top-level sections are its NN-<slug> directories.
DOCSITE_CONTENT_PATH = Path(os.getenv("DOCSITE_CONTENT_PATH", DEFAULT_CONTENT_DIR)).expanduser().resolve()
DOCSITE_WORDS_PER_MINUTE = int(os.getenv("DOCSITE_WORDS_PER_MINUTE", str(DEFAULT_WORDS_PER_MINUTE)))
DOCSITE_SEARCH_MAX_RESULTS = int(os.getenv("DOCSITE_SEARCH_MAX_RESULTS", str(DEFAULT_SEARCH_MAX_RESULTS)))
DOCSITE_PRUNE_EMPTY_SECTIONS = _env_flag("DOCSITE_PRUNE_EMPTY_SECTIONS", True)
DOCSITE_LOG_LEVEL = os.getenv("DOCSITE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
