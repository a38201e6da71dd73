"""Split markdown files into a YAML front matter mapping and a body."""

from __future__ import annotations

import re
from typing import Any

import yaml

from docsite.exceptions import FrontMatterError

_DELIMITER = "---"
_BOM = "\ufeff"


class FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that reads only ``true``/``false`` as booleans.

    Plain words such as ``Yes``, ``No`` or ``On`` stay strings, so a title
    like ``title: Yes`` is kept as written.
    """


FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:bool"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
FrontMatterLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def parse_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Return ``(metadata, body)`` for raw markdown ``text``.

    The block must open on the very first line with ``---`` and close with
    the next ``---`` line. Without both delimiters the whole text is the body
    and the metadata is empty.

    Raises:
        FrontMatterError: If the delimited block is not a YAML mapping.
    """
    if text.startswith(_BOM):
        text = text[len(_BOM):]

    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != _DELIMITER:
        return {}, text

    for index, line in enumerate(lines[1:], start=1):
        if line.rstrip() == _DELIMITER:
            block = "".join(lines[1:index])
            body = "".join(lines[index + 1:])
            return _load_block(block), body

    return {}, text


def _load_block(block: str) -> dict[str, Any]:
    try:
        data = yaml.load(block, Loader=FrontMatterLoader)  # noqa: S506
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        # The block starts on line 2 of the file.
        where = f" at line {mark.line + 2}" if mark is not None else ""
        raise FrontMatterError(f"Invalid YAML front matter{where}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"Front matter must be a mapping, got {type(data).__name__}"
        )
    return {str(key): value for key, value in data.items()}
