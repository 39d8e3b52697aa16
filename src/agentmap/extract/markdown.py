"""README descriptions — plain text from the top of a markdown file.

The block structure comes from tree-sitter-markdown's block grammar; the
text of headings and paragraphs is parsed again with its inline grammar so
that images and HTML tags can be dropped and links reduced to their text.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from tree_sitter import Node

from agentmap.extract.marker import MAX_LINES, truncate_description
from agentmap.languages.helpers import children_of_type, find_child, node_text
from agentmap.logging_config import get_logger
from agentmap.parser.errors import ParseFailure
from agentmap.parser.grammar import SourceParser

logger = get_logger("markdown")

MARKDOWN_MODULE = "tree_sitter_markdown"
BLOCK_GRAMMAR = "language"
INLINE_GRAMMAR = "inline_language"

_CONTAINERS = ("document", "section")
_LINKS = ("inline_link", "full_reference_link", "collapsed_reference_link", "shortcut_link")
_DROPPED_INLINE = ("image", "html_tag", "emphasis_delimiter")
_VERBATIM_INLINE = ("code_span",)


# ── inline ────────────────────────────────────────────────────────────────────


def inline_text(text: str, parser: Optional[SourceParser] = None) -> str:
    """Strip images, HTML tags and emphasis; reduce links to their text."""
    data = text.encode("utf-8")
    tree = (parser or SourceParser()).parse_with(data, MARKDOWN_MODULE, INLINE_GRAMMAR)
    return _render_inline(tree.root_node, data).decode("utf-8", errors="replace").strip()


def _render_inline(node: Node, data: bytes) -> bytes:
    kind = node.type
    if kind in _DROPPED_INLINE:
        return b""
    if kind in _LINKS:
        label = find_child(node, "link_text")
        return _render_inline(label, data) if label is not None else b""
    if kind in _VERBATIM_INLINE:
        return data[node.start_byte:node.end_byte]
    if kind == "backslash_escape":
        return data[node.start_byte + 1:node.end_byte]
    if kind in ("uri_autolink", "email_autolink"):
        return data[node.start_byte + 1:node.end_byte - 1]

    # Text runs are the gaps between child nodes.
    parts: List[bytes] = []
    pos = node.start_byte
    for child in node.children:
        parts.append(data[pos:child.start_byte])
        parts.append(_render_inline(child, data))
        pos = child.end_byte
    parts.append(data[pos:node.end_byte])
    return b"".join(parts)


# ── blocks ────────────────────────────────────────────────────────────────────


def _continuations(node: Node) -> List[Node]:
    found: List[Node] = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "block_continuation":
            found.append(current)
            continue
        stack.extend(current.children)
    return found


def _content(node: Node, data: bytes) -> str:
    """Text of *node* with quote and list continuation markers cut out."""
    parts: List[bytes] = []
    pos = node.start_byte
    for marker in sorted(_continuations(node), key=lambda n: n.start_byte):
        parts.append(data[pos:marker.start_byte])
        pos = max(pos, marker.end_byte)
    parts.append(data[pos:node.end_byte])
    return b"".join(parts).decode("utf-8", errors="replace")


class _BlockReader:
    def __init__(self, data: bytes, parser: SourceParser) -> None:
        self.data = data
        self.parser = parser

    def lines(self, node: Node) -> List[str]:
        out: List[str] = []
        for child in node.named_children:
            kind = child.type
            if kind in _CONTAINERS:
                out.extend(self.lines(child))
            elif kind == "atx_heading":
                content = child.child_by_field_name("heading_content") or find_child(child, "inline")
                self._append(out, self._inline(content))
            elif kind == "setext_heading":
                self._append(out, self._paragraph(find_child(child, "paragraph")))
            elif kind == "paragraph":
                self._append(out, self._paragraph(child))
            elif kind == "list":
                for item in children_of_type(child, "list_item"):
                    text = self._paragraph(find_child(item, "paragraph"))
                    if text:
                        out.append("- " + text.split("\n")[0])
            elif kind == "block_quote":
                out.extend("> " + line for line in self.lines(child))
            elif kind == "fenced_code_block":
                out.extend(self._fenced(child))
            elif kind == "indented_code_block":
                out.extend(self._indented(child))
            # html blocks, rules, tables, link definitions and front matter are dropped
        return out

    @staticmethod
    def _append(out: List[str], text: str) -> None:
        if text:
            out.append(text)

    def _paragraph(self, node: Optional[Node]) -> str:
        if node is None:
            return ""
        return self._inline(find_child(node, "inline"))

    def _inline(self, node: Optional[Node]) -> str:
        if node is None:
            return ""
        raw = "\n".join(line.strip() for line in _content(node, self.data).split("\n"))
        return inline_text(raw, self.parser)

    def _fenced(self, node: Node) -> List[str]:
        info = find_child(node, "info_string")
        words = node_text(info).split() if info is not None else []
        out = ["```" + (words[0] if words else "")]
        body = find_child(node, "code_fence_content")
        if body is not None:
            out.extend(_content(body, self.data).rstrip("\n").split("\n"))
        out.append("```")
        return out

    def _indented(self, node: Node) -> List[str]:
        body = _content(node, self.data).rstrip("\n").split("\n")
        return ["```", *(line[4:] if line.startswith("    ") else line.lstrip() for line in body), "```"]


def markdown_lines(source: str, parser: Optional[SourceParser] = None) -> List[str]:
    """Extract content lines from markdown *source*."""
    parser = parser or SourceParser()
    data = source.encode("utf-8")
    tree = parser.parse_with(data, MARKDOWN_MODULE, BLOCK_GRAMMAR)
    return _BlockReader(data, parser).lines(tree.root_node)


def describe_markdown(source: str, parser: Optional[SourceParser] = None) -> Optional[str]:
    """Description for a README, from its first MAX_LINES lines.

    If the markdown grammar cannot be used, the raw non-blank lines stand in.
    """
    head = "\n".join(source.split("\n")[:MAX_LINES])
    try:
        lines = markdown_lines(head, parser)
    except ParseFailure as exc:
        logger.debug("Markdown parse failed, using raw lines: %s", exc)
        lines = head.split("\n")
    content = [line for line in lines if line.strip()]
    if not content:
        return None
    return truncate_description(content)


def describe_markdown_file(path: Path) -> Optional[str]:
    return describe_markdown(path.read_text(encoding="utf-8", errors="replace"))
