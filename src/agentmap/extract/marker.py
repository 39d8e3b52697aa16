"""File header descriptions — the leading comment or module docstring.

Only the first ``MAX_LINES`` lines of a file are parsed. A shebang is kept,
JS directives are skipped and license boilerplate is passed over in favour
of the first real comment.
"""

from __future__ import annotations

import re
from typing import List, Optional

from tree_sitter import Node

from agentmap.languages.helpers import find_child, node_text
from agentmap.languages.models import Language
from agentmap.parser.grammar import SourceParser

MAX_LINES = 50
MAX_DESC_LINES = 25

_LICENSE_PATTERNS = [
    re.compile(r"\bcopyright\s*(?:\(c\)|©|\d{4})", re.IGNORECASE),
    re.compile(r"\bspdx-license-identifier\s*:", re.IGNORECASE),
    re.compile(r"\ball rights reserved\b", re.IGNORECASE),
    re.compile(r"\blicensed under\b", re.IGNORECASE),
    re.compile(r"\bpermission is hereby granted\b", re.IGNORECASE),
    re.compile(r"\bredistribution and use\b", re.IGNORECASE),
    re.compile(r"\bthis source code is licensed\b", re.IGNORECASE),
    re.compile(r"\bwithout warranty\b", re.IGNORECASE),
    re.compile(r"\bthe software is provided \"as is\"", re.IGNORECASE),
]

_DIRECTIVE_RE = re.compile(r"""^["']use (strict|client|server)["']$""")
_REFERENCE_RE = re.compile(r"^///\s*<reference\s")

_COMMENT_TYPES = ("comment", "line_comment", "block_comment")


def is_license_comment(text: str) -> bool:
    return any(p.search(text) for p in _LICENSE_PATTERNS)


def truncate_description(lines: List[str]) -> str:
    """Join *lines*, trim, and cap at MAX_DESC_LINES with a trailer line."""
    text = "\n".join(lines).strip()
    kept = text.split("\n")
    if len(kept) <= MAX_DESC_LINES:
        return text
    remaining = len(kept) - MAX_DESC_LINES
    return "\n".join([*kept[:MAX_DESC_LINES], f"... and {remaining} more lines"])


def head_lines(source: str, limit: int = MAX_LINES) -> str:
    return "\n".join(source.split("\n")[:limit])


def extract_header(
    source: str,
    language: Language,
    parser: Optional[SourceParser] = None,
) -> Optional[str]:
    """Return the file's header description, or None if it has none.

    Raises ParseFailure if the grammar is unavailable.
    """
    tree = (parser or SourceParser()).parse(head_lines(source), language)
    return header_from_tree(tree.root_node, language)


def header_from_tree(root: Node, language: Language) -> Optional[str]:
    """Header description from a parsed tree; only nodes starting in the first
    MAX_LINES lines are considered.
    """
    children = [child for child in root.children if child.start_point[0] < MAX_LINES]
    if not children:
        return None

    idx = 0
    shebang: Optional[str] = None
    first = children[0]
    if first.type == "hash_bang_line" or (
        first.type == "comment" and node_text(first).startswith("#!")
    ):
        shebang = node_text(first).strip()
        idx = 1

    while idx < len(children) and _is_directive(children[idx]):
        idx += 1

    if idx >= len(children):
        return shebang

    node = children[idx]
    description: Optional[str] = None

    if language is Language.PYTHON and node.type == "expression_statement":
        string = find_child(node, "string")
        if string is not None:
            docstring = _python_docstring(string)
            if docstring and is_license_comment(docstring):
                description = _consecutive_comments(children, idx + 1, language) or None
            else:
                description = docstring or None
            return _with_shebang(shebang, description)

    if _is_comment(node):
        description = _comments_skipping_license(children, idx, language)

    return _with_shebang(shebang, description)


# ── helpers ───────────────────────────────────────────────────────────────────


def _with_shebang(shebang: Optional[str], description: Optional[str]) -> Optional[str]:
    if not description:
        return shebang
    if not shebang:
        return description
    return f"{shebang}\n{description}"


def _is_comment(node: Node) -> bool:
    return node.type in _COMMENT_TYPES


def _is_directive(node: Node) -> bool:
    if node.type != "expression_statement" or not node.children:
        return False
    string = node.children[0]
    return string.type == "string" and bool(_DIRECTIVE_RE.match(node_text(string)))


def _comments_skipping_license(
    children: List[Node], start: int, language: Language
) -> Optional[str]:
    for idx in range(start, len(children)):
        node = children[idx]
        if not _is_comment(node):
            continue
        text = comment_text(node, language)
        if text is None or is_license_comment(text):
            continue
        return _consecutive_comments(children, idx, language)
    return None


def _consecutive_comments(children: List[Node], start: int, language: Language) -> str:
    lines: List[str] = []
    for node in children[start:]:
        if not _is_comment(node):
            break
        text = comment_text(node, language)
        if text is not None:
            lines.extend(text.split("\n"))
    return truncate_description(lines)


def comment_text(node: Node, language: Language) -> Optional[str]:
    """Comment body with its delimiters and gutters removed."""
    text = node_text(node)
    if _REFERENCE_RE.match(text):
        return None

    if language is Language.RUST and node.type == "line_comment":
        doc = find_child(node, "doc_comment")
        if doc is not None:
            return node_text(doc).strip()
        return _strip_line_prefix(text, "//")

    if text.startswith("/*") or node.type == "block_comment":
        return _block_comment_text(text)
    if text.startswith("//"):
        return _strip_line_prefix(text, "//")
    if text.startswith("#"):
        return _strip_line_prefix(text, "#")
    return text.strip()


def _strip_line_prefix(text: str, prefix: str) -> str:
    content = text[len(prefix):]
    if prefix == "//" and content[:1] in ("!", "/"):
        content = content[1:]
    if prefix == "#" and content.startswith("#"):
        content = content[1:]
    if content.startswith(" "):
        content = content[1:]
    return content.rstrip()


def _block_comment_text(text: str) -> str:
    content = text[2:]
    if content.endswith("*/"):
        content = content[:-2]
    if content.startswith("*"):
        content = content[1:]

    lines = []
    for line in content.split("\n"):
        stripped = line.strip()
        if stripped.startswith("* "):
            lines.append(stripped[2:])
        elif stripped == "*":
            lines.append("")
        elif stripped.startswith("*"):
            lines.append(stripped[1:].strip())
        else:
            lines.append(stripped)
    return "\n".join(lines).strip()


def _python_docstring(node: Node) -> str:
    content = find_child(node, "string_content")
    if content is not None:
        return truncate_description(node_text(content).strip().split("\n"))

    text = node_text(node)
    for quote in ('"""', "'''"):
        if text.startswith(quote):
            text = text[3:]
        if text.endswith(quote):
            text = text[:-3]
    return truncate_description(text.strip().split("\n"))
