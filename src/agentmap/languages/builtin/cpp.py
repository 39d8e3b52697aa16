"""C and C++ capability table (both parsed with the C++ grammar)."""

from __future__ import annotations

from typing import List, Optional, Tuple

from tree_sitter import Node

from agentmap.languages.helpers import children_of_type, node_text
from agentmap.languages.models import Binding, DefinitionKind, Language, LanguageSpec

_NAME_LEAVES = frozenset({
    "identifier",
    "field_identifier",
    "type_identifier",
    "qualified_identifier",
    "destructor_name",
    "operator_name",
})

_DECLARATOR_WRAPPERS = frozenset({
    "init_declarator",
    "pointer_declarator",
    "reference_declarator",
    "array_declarator",
    "function_declarator",
    "parenthesized_declarator",
    "attributed_declarator",
})

_TEMPLATE_NOISE = frozenset({"template", "template_parameter_list", "comment"})


def _inner_declarator(node: Node) -> Optional[Node]:
    inner = node.child_by_field_name("declarator")
    if inner is not None:
        return inner
    named = node.named_children
    return named[-1] if named else None


def declarator_name(node: Optional[Node]) -> Optional[str]:
    """Unwrap ``*``, ``&``, ``[]``, ``()`` and ``= value`` layers down to the name."""
    while node is not None:
        if node.type in _NAME_LEAVES:
            return node_text(node) or None
        if node.type not in _DECLARATOR_WRAPPERS:
            return None
        node = _inner_declarator(node)
    return None


def _is_prototype(node: Node) -> bool:
    while node is not None and node.type in _DECLARATOR_WRAPPERS:
        if node.type == "function_declarator":
            return True
        if node.type == "init_declarator":
            return False
        node = _inner_declarator(node)
    return False


def _is_extern(node: Node) -> bool:
    return any(
        node_text(child) == "extern"
        for child in children_of_type(node, "storage_class_specifier")
    )


def _unwrap_template(node: Node) -> Tuple[Node, bool]:
    if node.type != "template_declaration":
        return node, False
    for child in node.children:
        if child.is_named and child.type not in _TEMPLATE_NOISE:
            return child, False
    return node, False


def _linkage_body(node: Node) -> Optional[List[Node]]:
    """Items inside ``extern "C" { ... }`` (or the single item after ``extern "C"``)."""
    if node.type != "linkage_specification":
        return None
    body = node.child_by_field_name("body")
    if body is None:
        return []
    if body.type == "declaration_list":
        return [child for child in body.children if child.is_named]
    return [body]


def _bindings(node: Node) -> Optional[List[Binding]]:
    if node.type != "declaration":
        return None
    bindings: List[Binding] = []
    for declarator in node.children_by_field_name("declarator"):
        if _is_prototype(declarator):
            continue
        name = declarator_name(declarator)
        if name:
            bindings.append(
                Binding(name=name, node=declarator, value=declarator.child_by_field_name("value"))
            )
    return bindings


def _name(node: Node) -> Optional[str]:
    return declarator_name(node.child_by_field_name("declarator"))


CPP = LanguageSpec(
    language=Language.CPP,
    extensions=(".c", ".h", ".cpp", ".cc", ".cxx", ".hpp", ".hh", ".hxx"),
    grammar_module="tree_sitter_cpp",
    kinds={
        DefinitionKind.FUNCTION: frozenset({"function_definition"}),
        DefinitionKind.CLASS: frozenset({"class_specifier"}),
        DefinitionKind.STRUCT: frozenset({"struct_specifier"}),
        DefinitionKind.UNION: frozenset({"union_specifier"}),
        DefinitionKind.TYPE: frozenset({"type_definition", "alias_declaration"}),
        DefinitionKind.ENUM: frozenset({"enum_specifier"}),
        DefinitionKind.CONST: frozenset({"declaration"}),
    },
    unwrap=_unwrap_template,
    name_fallback=_name,
    is_extern=_is_extern,
    bindings=_bindings,
    linkage_body=_linkage_body,
)
