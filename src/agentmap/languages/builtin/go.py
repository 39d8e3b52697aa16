"""Go capability table.

Visibility follows Go's export rule: an upper-case first letter.
``type``, ``const`` and ``var`` statements may introduce several names at
once, either in a parenthesised group or as ``a, b = 1, 2``.
"""

from __future__ import annotations

from typing import List, Optional

from tree_sitter import Node

from agentmap.languages.helpers import children_of_type, first_identifier, node_text
from agentmap.languages.models import Binding, DefinitionKind, Language, LanguageSpec, VisibilityRule


def _specs(node: Node, spec_type: str) -> List[Node]:
    found: List[Node] = []
    for child in node.children:
        if child.type == spec_type:
            found.append(child)
        elif child.type.endswith("_spec_list"):
            found.extend(children_of_type(child, spec_type))
    return found


def _bindings(node: Node) -> Optional[List[Binding]]:
    if node.type == "type_declaration":
        bindings: List[Binding] = []
        for spec in children_of_type(node, "type_spec", "type_alias"):
            name_node = spec.child_by_field_name("name")
            if name_node is not None:
                bindings.append(Binding(name=node_text(name_node), node=spec))
        return bindings

    if node.type in ("const_declaration", "var_declaration"):
        spec_type = "const_spec" if node.type == "const_declaration" else "var_spec"
        bindings = []
        for spec in _specs(node, spec_type):
            for name_node in spec.children_by_field_name("name"):
                name = node_text(name_node)
                if name and name != "_":
                    bindings.append(Binding(name=name, node=spec))
        return bindings

    return None


def _name(node: Node) -> Optional[str]:
    return first_identifier(node, ("identifier", "field_identifier"))


GO = LanguageSpec(
    language=Language.GO,
    extensions=(".go",),
    grammar_module="tree_sitter_go",
    kinds={
        DefinitionKind.FUNCTION: frozenset({"function_declaration", "method_declaration"}),
        DefinitionKind.TYPE: frozenset({"type_declaration"}),
        DefinitionKind.CONST: frozenset({"const_declaration", "var_declaration"}),
    },
    visibility=VisibilityRule.NAME_CASE,
    name_fallback=_name,
    bindings=_bindings,
    gate_bindings_on_export=True,
)
