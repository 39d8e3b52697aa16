"""Zig capability table.

Containers are values in Zig (``pub const Point = struct { ... };``), so the
``const`` category is refined to struct / union / enum by the value node.
Only ``pub const`` bindings are reported.
"""

from __future__ import annotations

from typing import List, Optional

from tree_sitter import Node

from agentmap.languages.helpers import find_child, first_identifier, has_token, node_text
from agentmap.languages.models import Binding, DefinitionKind, Language, LanguageSpec, VisibilityRule

_CONTAINER_KINDS = {
    "struct_declaration": DefinitionKind.STRUCT,
    "union_declaration": DefinitionKind.UNION,
    "enum_declaration": DefinitionKind.ENUM,
}


def _is_public(node: Node) -> bool:
    return has_token(node, "pub", stop_at=("identifier", "block"))


def _is_extern(node: Node) -> bool:
    return has_token(node, "extern", stop_at=("block", "fn"))


def _name(node: Node) -> Optional[str]:
    if node.type == "test_declaration":
        label = find_child(node, "string")
        if label is not None:
            return node_text(label).strip('"') or None
    return first_identifier(node, ("identifier",))


def _bindings(node: Node) -> Optional[List[Binding]]:
    if node.type != "variable_declaration":
        return None
    if not has_token(node, "const", stop_at=("var",)):
        return []
    name = first_identifier(node, ("identifier",))
    if not name:
        return []
    kind = None
    for child in node.children:
        if child.type in _CONTAINER_KINDS:
            kind = _CONTAINER_KINDS[child.type]
            break
    return [Binding(name=name, node=node, kind=kind)]


ZIG = LanguageSpec(
    language=Language.ZIG,
    extensions=(".zig",),
    grammar_module="tree_sitter_zig",
    kinds={
        DefinitionKind.FUNCTION: frozenset({"function_declaration", "test_declaration"}),
        DefinitionKind.CONST: frozenset({"variable_declaration"}),
    },
    visibility=VisibilityRule.KEYWORD,
    name_fallback=_name,
    is_public=_is_public,
    is_extern=_is_extern,
    bindings=_bindings,
    gate_bindings_on_export=True,
)
