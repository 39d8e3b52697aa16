"""Capability records — one LanguageSpec per supported grammar."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

from tree_sitter import Node


class Language(str, Enum):
    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    RUST = "rust"
    GO = "go"
    ZIG = "zig"
    CPP = "cpp"


class DefinitionKind(str, Enum):
    FUNCTION = "function"
    CLASS = "class"
    STRUCT = "struct"
    UNION = "union"
    TRAIT = "trait"
    INTERFACE = "interface"
    TYPE = "type"
    ENUM = "enum"
    CONST = "const"


class VisibilityRule(str, Enum):
    KEYWORD = "keyword"  # explicit token (pub, export)
    NAME_CASE = "name_case"  # upper-case first letter
    NONE = "none"


# Classification precedence: function > aggregate > trait > interface >
# type-alias > enum > constant.
CLASSIFY_ORDER: Tuple[DefinitionKind, ...] = (
    DefinitionKind.FUNCTION,
    DefinitionKind.CLASS,
    DefinitionKind.STRUCT,
    DefinitionKind.UNION,
    DefinitionKind.TRAIT,
    DefinitionKind.INTERFACE,
    DefinitionKind.TYPE,
    DefinitionKind.ENUM,
    DefinitionKind.CONST,
)

SIZE_FILTERED_KINDS: FrozenSet[DefinitionKind] = frozenset({
    DefinitionKind.FUNCTION,
    DefinitionKind.CLASS,
    DefinitionKind.STRUCT,
    DefinitionKind.UNION,
    DefinitionKind.TRAIT,
})


@dataclass(frozen=True)
class Binding:
    """One name introduced by a declaration statement."""

    name: str
    node: Node  # supplies the line range for names after the first
    value: Optional[Node] = None
    kind: Optional[DefinitionKind] = None  # overrides the statement's kind


def _no_unwrap(node: Node) -> Tuple[Node, bool]:
    return node, False


def _no_name(node: Node) -> Optional[str]:
    return None


def _never(node: Node) -> bool:
    return False


def _no_linkage(node: Node) -> Optional[List[Node]]:
    return None


@dataclass(frozen=True)
class LanguageSpec:
    """Everything the extractor needs to know about one grammar.

    ``kinds`` maps each definition kind to the node types that produce it.
    The callables are pure functions over tree-sitter nodes; they never
    look at sibling or parent nodes.
    """

    language: Language
    extensions: Tuple[str, ...]
    grammar_module: str
    kinds: Dict[DefinitionKind, FrozenSet[str]]
    grammar_function: str = "language"
    visibility: VisibilityRule = VisibilityRule.NONE
    unwrap: Callable[[Node], Tuple[Node, bool]] = _no_unwrap
    name_fallback: Callable[[Node], Optional[str]] = _no_name
    is_public: Callable[[Node], bool] = _never
    is_extern: Callable[[Node], bool] = _never
    bindings: Optional[Callable[[Node], Optional[List[Binding]]]] = None
    linkage_body: Callable[[Node], Optional[List[Node]]] = _no_linkage
    anonymous_function_kinds: FrozenSet[str] = field(default_factory=frozenset)
    gate_bindings_on_export: bool = False

    def classify(self, node_type: str) -> Optional[DefinitionKind]:
        """Return the first kind (in precedence order) listing *node_type*."""
        for kind in CLASSIFY_ORDER:
            if node_type in self.kinds.get(kind, frozenset()):
                return kind
        return None

    @property
    def node_types(self) -> FrozenSet[str]:
        return frozenset().union(*self.kinds.values())
