"""Rust capability table."""

from __future__ import annotations

from typing import Optional

from tree_sitter import Node

from agentmap.languages.helpers import find_child, first_identifier, node_text
from agentmap.languages.models import DefinitionKind, Language, LanguageSpec, VisibilityRule


def _is_public(node: Node) -> bool:
    modifier = find_child(node, "visibility_modifier")
    return modifier is not None and node_text(modifier).startswith("pub")


def _is_extern(node: Node) -> bool:
    modifiers = find_child(node, "function_modifiers")
    return modifiers is not None and find_child(modifiers, "extern_modifier") is not None


def _type_name(node: Optional[Node]) -> Optional[str]:
    """Name of the type in an ``impl`` header: ``impl<T> Foo<T>`` → ``Foo``."""
    while node is not None:
        if node.type in ("type_identifier", "primitive_type"):
            return node_text(node)
        if node.type == "generic_type":
            node = node.child_by_field_name("type")
        elif node.type == "scoped_type_identifier":
            node = node.child_by_field_name("name")
        elif node.type == "reference_type":
            node = node.child_by_field_name("type")
        else:
            return first_identifier(node, ("type_identifier",))
    return None


def _name(node: Node) -> Optional[str]:
    if node.type == "impl_item":
        return _type_name(node.child_by_field_name("type"))
    return first_identifier(node, ("identifier", "type_identifier"))


RUST = LanguageSpec(
    language=Language.RUST,
    extensions=(".rs",),
    grammar_module="tree_sitter_rust",
    kinds={
        DefinitionKind.FUNCTION: frozenset({"function_item"}),
        DefinitionKind.CLASS: frozenset({"impl_item"}),
        DefinitionKind.STRUCT: frozenset({"struct_item"}),
        DefinitionKind.UNION: frozenset({"union_item"}),
        DefinitionKind.TRAIT: frozenset({"trait_item"}),
        DefinitionKind.TYPE: frozenset({"type_item"}),
        DefinitionKind.ENUM: frozenset({"enum_item"}),
        DefinitionKind.CONST: frozenset({"const_item", "static_item"}),
    },
    visibility=VisibilityRule.KEYWORD,
    name_fallback=_name,
    is_public=_is_public,
    is_extern=_is_extern,
)
