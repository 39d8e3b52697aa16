"""Structural definition extractor.

Walks the immediate children of a syntax tree's root and turns the ones the
language's capability record recognises into ``Definition`` records. The
work is split into small stages so each rule can be tested on its own:

    top_level_items  → (node, forced_extern) pairs, linkage blocks flattened
    unwrap           → strip export / decorator / template wrappers
    classify         → first matching kind in precedence order
    expand           → one Definition per bound name (size + export gating)
    dedupe           → first occurrence of each name wins
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from tree_sitter import Node

from agentmap.extract.models import MIN_BODY_LINES, Definition, Visibility
from agentmap.languages.helpers import line_span, node_text
from agentmap.languages.models import (
    SIZE_FILTERED_KINDS,
    Binding,
    DefinitionKind,
    Language,
    LanguageSpec,
    VisibilityRule,
)
from agentmap.languages.registry import LanguageRegistry, default_registry
from agentmap.parser.errors import UnsupportedLanguage


def extract_definitions(
    root: Node,
    language: Language,
    registry: Optional[LanguageRegistry] = None,
) -> List[Definition]:
    """Return the top-level definitions under *root*, in source order."""
    spec = (registry or default_registry()).get(language)
    if spec is None:
        raise UnsupportedLanguage(f"No capability record for {language!r}")
    found: List[Definition] = []
    for node, forced_extern in top_level_items(root, spec):
        found.extend(expand(node, spec, forced_extern=forced_extern))
    return dedupe(found)


# ── stages ────────────────────────────────────────────────────────────────────


def top_level_items(root: Node, spec: LanguageSpec) -> Iterator[Tuple[Node, bool]]:
    """Yield the root's children; items inside a linkage block are forced extern."""
    for child in root.children:
        body = spec.linkage_body(child)
        if body is None:
            yield child, False
        else:
            for inner in body:
                yield inner, True


def unwrap(node: Node, spec: LanguageSpec) -> Tuple[Node, bool]:
    """Return the wrapped declaration and whether the wrapper exported it."""
    return spec.unwrap(node)


def classify(node: Node, spec: LanguageSpec) -> Optional[DefinitionKind]:
    return spec.classify(node.type)


def passes_size_filter(kind: DefinitionKind, lines: int) -> bool:
    """Bodies of function-like and aggregate kinds must exceed MIN_BODY_LINES."""
    return kind not in SIZE_FILTERED_KINDS or lines > MIN_BODY_LINES


def resolve_name(node: Node, spec: LanguageSpec) -> Optional[str]:
    """``name`` field first, then the language's own lookup."""
    name_node = node.child_by_field_name("name")
    if name_node is not None:
        name = node_text(name_node).strip().strip('"')
        if name:
            return name
    return spec.name_fallback(node)


def expand(node: Node, spec: LanguageSpec, *, forced_extern: bool = False) -> List[Definition]:
    """Turn one top-level node into zero or more definitions."""
    inner, exported = unwrap(node, spec)
    kind = classify(inner, spec)
    if kind is None:
        return []

    extern = forced_extern or spec.is_extern(node) or spec.is_extern(inner)
    keyword_public = exported or (
        spec.visibility is VisibilityRule.KEYWORD and spec.is_public(inner)
    )

    bindings = spec.bindings(inner) if spec.bindings is not None else None
    if bindings is None:
        if not passes_size_filter(kind, line_span(node)):
            return []
        name = resolve_name(inner, spec)
        if not name:
            return []
        return [_make(name, node, kind, _visibility(spec, name, keyword_public), extern)]

    return list(_expand_bindings(node, kind, bindings, spec, keyword_public, extern))


def _expand_bindings(
    statement: Node,
    kind: DefinitionKind,
    bindings: Iterable[Binding],
    spec: LanguageSpec,
    keyword_public: bool,
    extern: bool,
) -> Iterator[Definition]:
    for index, binding in enumerate(bindings):
        value = binding.value
        is_function = False
        if value is not None and value.type in spec.anonymous_function_kinds:
            is_function = True
            if line_span(value) <= MIN_BODY_LINES:
                continue
            binding_kind = DefinitionKind.FUNCTION
        else:
            binding_kind = binding.kind or kind

        visibility = _visibility(spec, binding.name, keyword_public)
        if (
            spec.gate_bindings_on_export
            and kind is DefinitionKind.CONST
            and visibility is Visibility.PRIVATE
            and not is_function
        ):
            continue

        # The first name speaks for the whole statement.
        anchor = statement if index == 0 else binding.node
        if not is_function and not passes_size_filter(kind, line_span(anchor)):
            continue
        yield _make(binding.name, anchor, binding_kind, visibility, extern)


def dedupe(definitions: Iterable[Definition]) -> List[Definition]:
    """Keep the first definition of each name."""
    seen: set[str] = set()
    unique: List[Definition] = []
    for definition in definitions:
        if definition.name in seen:
            continue
        seen.add(definition.name)
        unique.append(definition)
    return unique


# ── helpers ───────────────────────────────────────────────────────────────────


def _visibility(spec: LanguageSpec, name: str, keyword_public: bool) -> Visibility:
    if spec.visibility is VisibilityRule.NAME_CASE:
        return Visibility.PUBLIC if name[:1].isupper() else Visibility.PRIVATE
    return Visibility.PUBLIC if keyword_public else Visibility.PRIVATE


def _make(
    name: str,
    node: Node,
    kind: DefinitionKind,
    visibility: Visibility,
    extern: bool,
) -> Definition:
    return Definition(
        name=name,
        start_line=node.start_point[0] + 1,
        end_line=node.end_point[0] + 1,
        kind=kind,
        visibility=visibility,
        extern=extern,
    )
