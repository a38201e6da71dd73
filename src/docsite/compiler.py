"""Compile markdown/MDX bodies into render trees."""

from __future__ import annotations

import html as html_lib
import logging
import re

import markdown
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

from docsite.exceptions import CompileError
from docsite.schemas import (
    CompiledDocument,
    CompileErrorInfo,
    DocContent,
    RenderNode,
    TocEntry,
)

try:
    from bs4 import BeautifulSoup
    from bs4.element import NavigableString, Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for render tree construction (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)

_MARKDOWN_EXTENSIONS = ["tables", "fenced_code", "def_list", "sane_lists"]

_HEADING_RE = re.compile(r"^h[1-6]$")
_NON_ALNUM_RE = re.compile(r"[\W_]+")
_FENCE_RE = re.compile(r"^(`{3,}|~{3,})")
_MDX_ESM_RE = re.compile(r"""^(?:import\s.+\sfrom\s+["']|import\s+["']|export\s+(?:const|let|var|function|default|\{))""")
_INLINE_CODE_RE = re.compile(r"(`+).+?\1")
_COMPONENT_TAG_RE = re.compile(r"<(/?)([A-Z][\w.]*)\b[^<>]*?(/?)>")
_PRESERVE_WHITESPACE = ["pre", "code"]
_BLOCK_CONTAINERS = frozenset(
    {"[document]", "html", "body", "div", "blockquote", "ul", "ol", "dl", "table", "thead", "tbody", "tfoot", "tr"}
)
_BLOCK_TAGS = _BLOCK_CONTAINERS | {
    "p", "li", "dt", "dd", "th", "td", "pre", "hr", "h1", "h2", "h3", "h4", "h5", "h6",
}

_formatter = HtmlFormatter(nowrap=True)


def heading_anchor(text: str) -> str:
    """Derive an anchor from heading text: ``"Getting Started!"`` -> ``getting-started``."""
    anchor = _NON_ALNUM_RE.sub("-", text.lower()).strip("-")
    return anchor or "section"


class AnchorRegistry:
    """Hands out heading anchors that are unique within one document."""

    def __init__(self) -> None:
        self._seen: set[str] = set()
        self._counts: dict[str, int] = {}

    def unique(self, text: str) -> str:
        base = heading_anchor(text)
        anchor = base
        count = self._counts.get(base, 0)
        while anchor in self._seen:
            count += 1
            anchor = f"{base}-{count}"
        self._counts[base] = count
        self._seen.add(anchor)
        return anchor


def compile_content(body: str) -> CompiledDocument:
    """Compile a markdown/MDX body into a render tree.

    Headings receive unique ``id`` anchors, fenced code is highlighted with
    Pygments, and a table of contents is collected. Nothing outside ``body``
    is read.

    Raises:
        CompileError: If the body has unbalanced MDX component tags or the
            markdown converter fails. An unclosed code fence runs to the end
            of the body.
    """
    source, components = _prepare_source(body)
    try:
        converter = markdown.Markdown(extensions=_MARKDOWN_EXTENSIONS)
        rendered = converter.convert(source)
    except Exception as exc:
        raise CompileError(f"Markdown conversion failed: {exc}") from exc

    soup = BeautifulSoup(rendered, "lxml")
    container = soup.body or soup

    _mark_components(container, components)
    toc = _annotate_headings(container)
    for pre in container.find_all("pre"):
        _highlight_code_block(pre)

    return CompiledDocument(
        nodes=_serialize_children(container),
        toc=tuple(toc),
        html=container.decode_contents(),
    )


def compile_document(doc: DocContent) -> CompiledDocument:
    """Compile ``doc``, degrading a ``CompileError`` into an error panel."""
    try:
        return compile_content(doc.content)
    except CompileError as exc:
        logger.warning("Failed to compile %s: %s", doc.slug, exc)
        return error_panel(exc)


def error_panel(error: CompileError) -> CompiledDocument:
    """Render tree shown in place of a document that failed to compile."""
    details = html_lib.escape(str(error))
    panel = (
        '<div class="compile-error" role="alert">'
        "<h1>Error Loading Content</h1>"
        "<p>Sorry, there was an error loading this documentation page.</p>"
        f"<pre>{details}</pre>"
        "</div>"
    )
    soup = BeautifulSoup(panel, "lxml")
    container = soup.body or soup
    return CompiledDocument(
        nodes=_serialize_children(container),
        html=container.decode_contents(),
        error=CompileErrorInfo(message=error.message, line=error.line, fragment=error.fragment),
    )


def _prepare_source(body: str) -> tuple[str, set[str]]:
    """Validate fences and MDX tags, dropping MDX import/export lines.

    Returns the cleaned source and the component names it uses.
    """
    lines = body.splitlines()
    kept: list[str] = []
    fence: str | None = None
    fence_line = 0
    components: list[tuple[str, int]] = []
    names: set[str] = set()

    for number, line in enumerate(lines, start=1):
        match = _FENCE_RE.match(line)
        if fence is None and match:
            fence = match.group(1)
            fence_line = number
            kept.append(line)
            continue
        if fence is not None:
            if line.rstrip(" ") == fence:
                fence = None
            kept.append(line)
            continue

        if _MDX_ESM_RE.match(line):
            continue
        _track_components(line, number, components, names)
        kept.append(line)

    if fence is not None:
        # An unclosed fence runs to the end of the document.
        logger.debug("Closing code fence opened on line %d at end of document", fence_line)
        kept.append(fence)
    if components:
        name, number = components[-1]
        raise CompileError(
            f"Unclosed component <{name}>", line=number, fragment=lines[number - 1]
        )
    return "\n".join(kept), names


def _track_components(
    line: str, number: int, stack: list[tuple[str, int]], names: set[str]
) -> None:
    scannable = _INLINE_CODE_RE.sub("", line)
    for closing, name, self_closing in _COMPONENT_TAG_RE.findall(scannable):
        names.add(name)
        if self_closing:
            continue
        if not closing:
            stack.append((name, number))
            continue
        if not stack or stack[-1][0] != name:
            expected = f"</{stack[-1][0]}>" if stack else "no closing tag"
            raise CompileError(
                f"Unexpected </{name}>, expected {expected}", line=number, fragment=line
            )
        stack.pop()


def _mark_components(container: Tag, names: set[str]) -> None:
    # The HTML parser lowercases tag names; keep the component name as written.
    by_tag = {name.lower(): name for name in names}
    if not by_tag:
        return
    for element in container.find_all(list(by_tag)):
        element["data-component"] = by_tag[element.name]


def _annotate_headings(container: Tag) -> list[TocEntry]:
    registry = AnchorRegistry()
    toc: list[TocEntry] = []
    for heading in container.find_all(_HEADING_RE):
        title = heading.get_text().strip()
        anchor = registry.unique(title)
        heading["id"] = anchor
        toc.append(TocEntry(level=int(heading.name[1]), title=title, anchor=anchor))
    return toc


def _highlight_code_block(pre: Tag) -> None:
    code = pre.find("code")
    if code is None:
        return
    declared = _declared_language(code)
    source = code.get_text()
    lexer, language = _resolve_lexer(source, declared)

    if language:
        pre["data-language"] = language
        code["class"] = [f"language-{language}"]
    if lexer is None:
        return

    fragment = BeautifulSoup(highlight(source, lexer, _formatter), "html.parser")
    code.clear()
    for node in list(fragment.contents):
        code.append(node.extract())
    code["class"] = code.get("class", []) + ["highlight"]


def _declared_language(code: Tag) -> str | None:
    for cls in code.get("class", []):
        if cls.startswith("language-") and len(cls) > len("language-"):
            return cls[len("language-"):]
    return None


def _resolve_lexer(source: str, declared: str | None) -> tuple[Lexer | None, str | None]:
    if declared:
        try:
            return get_lexer_by_name(declared), declared
        except ClassNotFound:
            logger.debug("No lexer for language %r, rendering as plain text", declared)
            return None, declared

    if not source.strip():
        return None, None
    try:
        lexer = guess_lexer(source)
    except ClassNotFound:
        return None, None
    if isinstance(lexer, TextLexer):
        return None, None
    language = lexer.aliases[0] if lexer.aliases else lexer.name.lower()
    return lexer, language


def _serialize_children(tag: Tag) -> tuple[RenderNode, ...]:
    preserve = tag.name in _PRESERVE_WHITESPACE or tag.find_parent(_PRESERVE_WHITESPACE) is not None
    nodes: list[RenderNode] = []
    for child in tag.children:
        if isinstance(child, NavigableString):
            if type(child) is not NavigableString:
                continue
            text = str(child)
            if not preserve and _is_layout_whitespace(child, text):
                continue
            nodes.append(RenderNode(type="text", text=text))
        elif isinstance(child, Tag):
            nodes.append(_serialize_tag(child))
    return tuple(nodes)


def _serialize_tag(tag: Tag) -> RenderNode:
    attrs = {
        key: " ".join(value) if isinstance(value, list) else str(value)
        for key, value in tag.attrs.items()
    }
    return RenderNode(
        type="element",
        tag=tag.name,
        attrs=attrs,
        children=_serialize_children(tag),
    )


def _is_layout_whitespace(node: NavigableString, text: str) -> bool:
    # Newlines between block elements; soft breaks inside a paragraph are kept.
    if text.strip() or "\n" not in text:
        return False
    if node.parent is not None and node.parent.name in _BLOCK_CONTAINERS:
        return True
    return any(
        isinstance(sibling, Tag) and sibling.name in _BLOCK_TAGS
        for sibling in (node.previous_sibling, node.next_sibling)
    )
