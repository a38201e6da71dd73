"""Test setup for docsite."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from docsite.repository import clear_snapshots  # noqa: E402

WriteDoc = Callable[..., Path]


def render_front_matter(**fields: object) -> str:
    """Render simple YAML front matter for test documents."""
    lines = ["---"]
    for key, value in fields.items():
        if isinstance(value, list):
            lines.append(f"{key}:")
            lines.extend(f"  - {item}" for item in value)
        elif isinstance(value, bool):
            lines.append(f"{key}: {'true' if value else 'false'}")
        else:
            lines.append(f"{key}: {value}")
    lines.append("---")
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_doc(tmp_path: Path) -> WriteDoc:
    """Write a markdown file under ``tmp_path`` with optional front matter."""

    def _write(relative: str, body: str = "Body text.\n", **front_matter: object) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        header = render_front_matter(**front_matter) if front_matter else ""
        path.write_text(header + body, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def content_root(tmp_path: Path, write_doc: WriteDoc) -> Path:
    """A small corpus with two sections, a subsection and a README."""
    (tmp_path / "README.md").write_text("# Not a section\n", encoding="utf-8")
    write_doc("01-intro/overview.md", "Welcome to the guide.\n", title="Intro", order=0)
    write_doc(
        "01-intro/advanced.md",
        "Deeper material on context windows.\n",
        title="Advanced",
        order=1,
        description="Power user tips",
        tags=["context", "tips"],
    )
    write_doc("02-web-development/frontend.md", "## Components\n\nReact and friends.\n", title="Frontend")
    write_doc(
        "02-web-development/backend/databases.md",
        "Postgres, indexes and migrations.\n",
        title="Databases",
    )
    write_doc("02-web-development/drafts.md", "Hidden work in progress.\n", title="Drafts", published=False)
    return tmp_path


@pytest.fixture(autouse=True)
def _reset_snapshots() -> None:
    clear_snapshots()
