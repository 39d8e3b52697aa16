"""Small node utilities shared by the per-language tables."""

from __future__ import annotations

from typing import Iterable, Optional

from tree_sitter import Node


def node_text(node: Node) -> str:
    raw = node.text
    if raw is None:
        return ""
    return raw.decode("utf-8", errors="replace")


def find_child(node: Node, *types: str) -> Optional[Node]:
    """Return the first direct child whose type is in *types*."""
    for child in node.children:
        if child.type in types:
            return child
    return None


def children_of_type(node: Node, *types: str) -> list[Node]:
    return [child for child in node.children if child.type in types]


def first_identifier(node: Node, types: Iterable[str]) -> Optional[str]:
    wanted = tuple(types)
    child = find_child(node, *wanted)
    if child is None:
        return None
    return node_text(child) or None


def line_span(node: Node) -> int:
    """Number of lines covered by *node*, inclusive."""
    return node.end_point[0] - node.start_point[0] + 1


def has_token(node: Node, token: str, stop_at: Iterable[str] = ()) -> bool:
    """True if a direct child of type *token* appears before any *stop_at* child."""
    stops = tuple(stop_at)
    for child in node.children:
        if child.type == token:
            return True
        if child.type in stops:
            return False
    return False
