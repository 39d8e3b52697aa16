"""Python capability table."""

from __future__ import annotations

from typing import Optional, Tuple

from tree_sitter import Node

from agentmap.languages.helpers import first_identifier
from agentmap.languages.models import DefinitionKind, Language, LanguageSpec


def _unwrap_decorated(node: Node) -> Tuple[Node, bool]:
    if node.type == "decorated_definition":
        inner = node.child_by_field_name("definition")
        if inner is not None:
            return inner, False
    return node, False


def _name(node: Node) -> Optional[str]:
    return first_identifier(node, ("identifier",))


PYTHON = LanguageSpec(
    language=Language.PYTHON,
    extensions=(".py", ".pyi"),
    grammar_module="tree_sitter_python",
    kinds={
        DefinitionKind.FUNCTION: frozenset({"function_definition"}),
        DefinitionKind.CLASS: frozenset({"class_definition"}),
    },
    unwrap=_unwrap_decorated,
    name_fallback=_name,
)
