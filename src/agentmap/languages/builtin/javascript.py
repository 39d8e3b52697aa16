"""JavaScript capability table — TypeScript's rules minus the type system."""

from agentmap.languages.builtin.typescript import (
    ANONYMOUS_FUNCTIONS,
    lexical_bindings,
    script_name,
    unwrap_export,
)
from agentmap.languages.models import DefinitionKind, Language, LanguageSpec, VisibilityRule

JAVASCRIPT = LanguageSpec(
    language=Language.JAVASCRIPT,
    extensions=(".js", ".jsx", ".mjs", ".cjs"),
    grammar_module="tree_sitter_javascript",
    kinds={
        DefinitionKind.FUNCTION: frozenset({"function_declaration", "method_definition"}),
        DefinitionKind.CLASS: frozenset({"class_declaration"}),
        DefinitionKind.CONST: frozenset({"lexical_declaration"}),
    },
    visibility=VisibilityRule.KEYWORD,
    unwrap=unwrap_export,
    name_fallback=script_name,
    bindings=lexical_bindings,
    anonymous_function_kinds=ANONYMOUS_FUNCTIONS,
    gate_bindings_on_export=True,
)
