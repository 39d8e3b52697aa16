"""TypeScript capability table (parsed with the TSX dialect)."""

from __future__ import annotations

from typing import List, Optional, Tuple

from tree_sitter import Node

from agentmap.languages.helpers import first_identifier, node_text
from agentmap.languages.models import (
    Binding,
    DefinitionKind,
    Language,
    LanguageSpec,
    VisibilityRule,
)

_EXPORT_NOISE = ("export", "default", "comment", "decorator")

ANONYMOUS_FUNCTIONS = frozenset({"arrow_function", "function_expression", "function"})


def unwrap_export(node: Node) -> Tuple[Node, bool]:
    """``export [default] <declaration>`` → (<declaration>, True)."""
    if node.type != "export_statement":
        return node, False
    for child in node.children:
        if child.type not in _EXPORT_NOISE:
            return child, True
    return node, True


def lexical_bindings(node: Node) -> Optional[List[Binding]]:
    """One binding per ``name = value`` declarator; destructuring is skipped."""
    if node.type != "lexical_declaration":
        return None
    bindings: List[Binding] = []
    for declarator in node.children:
        if declarator.type != "variable_declarator":
            continue
        name_node = declarator.child_by_field_name("name")
        if name_node is None or name_node.type != "identifier":
            continue
        bindings.append(
            Binding(
                name=node_text(name_node),
                node=declarator,
                value=declarator.child_by_field_name("value"),
            )
        )
    return bindings


def script_name(node: Node) -> Optional[str]:
    return first_identifier(node, ("identifier", "type_identifier", "property_identifier"))


TYPESCRIPT = LanguageSpec(
    language=Language.TYPESCRIPT,
    extensions=(".ts", ".tsx", ".mts", ".cts"),
    grammar_module="tree_sitter_typescript",
    grammar_function="language_tsx",
    kinds={
        DefinitionKind.FUNCTION: frozenset({"function_declaration", "method_definition"}),
        DefinitionKind.CLASS: frozenset({"class_declaration", "abstract_class_declaration"}),
        DefinitionKind.INTERFACE: frozenset({"interface_declaration"}),
        DefinitionKind.TYPE: frozenset({"type_alias_declaration"}),
        DefinitionKind.ENUM: frozenset({"enum_declaration"}),
        DefinitionKind.CONST: frozenset({"lexical_declaration"}),
    },
    visibility=VisibilityRule.KEYWORD,
    unwrap=unwrap_export,
    name_fallback=script_name,
    bindings=lexical_bindings,
    anonymous_function_kinds=ANONYMOUS_FUNCTIONS,
    gate_bindings_on_export=True,
)
