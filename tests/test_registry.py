"""Tests for the grammar capability registry."""

import pytest

from agentmap.languages import (
    DefinitionKind,
    Language,
    LanguageRegistry,
    build_registry,
    detect_language,
)
from agentmap.languages.builtin import ALL_BUILTIN_LANGUAGES
from agentmap.languages.builtin.python import PYTHON


class TestDetection:
    @pytest.mark.parametrize("path,expected", [
        ("src/index.ts", Language.TYPESCRIPT),
        ("src/App.tsx", Language.TYPESCRIPT),
        ("lib/util.mjs", Language.JAVASCRIPT),
        ("lib/util.js", Language.JAVASCRIPT),
        ("pkg/main.py", Language.PYTHON),
        ("src/lib.rs", Language.RUST),
        ("cmd/main.go", Language.GO),
        ("build.zig", Language.ZIG),
        ("include/api.h", Language.CPP),
        ("src/engine.cpp", Language.CPP),
        ("src/legacy.c", Language.CPP),
    ])
    def test_known_extensions(self, path, expected):
        assert detect_language(path) == expected

    def test_extension_is_case_insensitive(self):
        assert detect_language("SRC/MAIN.PY") == Language.PYTHON

    def test_windows_separators(self):
        assert detect_language("src\\main.go") == Language.GO

    @pytest.mark.parametrize("path", ["README.md", "Makefile", "data.json", ".gitignore"])
    def test_unknown_extension(self, path):
        assert detect_language(path) is None


class TestRegistry:
    def test_every_builtin_registered(self):
        registry = build_registry()
        assert {s.language for s in registry.all_specs} == set(Language)
        assert len(ALL_BUILTIN_LANGUAGES) == len(Language)

    def test_extensions_unique_across_languages(self):
        seen = {}
        for spec in ALL_BUILTIN_LANGUAGES:
            for ext in spec.extensions:
                assert ext not in seen, f"{ext} claimed by {seen.get(ext)} and {spec.language}"
                seen[ext] = spec.language

    def test_for_path_returns_spec(self):
        registry = build_registry()
        spec = registry.for_path("a/b.py")
        assert spec is not None
        assert spec.grammar_module == "tree_sitter_python"

    def test_empty_registry(self):
        registry = LanguageRegistry()
        assert registry.detect("a.py") is None
        assert registry.get(Language.PYTHON) is None

    def test_register_custom_spec(self):
        registry = LanguageRegistry()
        registry.register(PYTHON)
        assert registry.detect("x.pyi") == Language.PYTHON
        assert ".py" in registry.extensions


class TestClassification:
    def test_precedence_first_kind_wins(self):
        registry = build_registry()
        ts = registry.get(Language.TYPESCRIPT)
        assert ts.classify("function_declaration") == DefinitionKind.FUNCTION
        assert ts.classify("interface_declaration") == DefinitionKind.INTERFACE
        assert ts.classify("lexical_declaration") == DefinitionKind.CONST

    def test_unknown_node_type(self):
        registry = build_registry()
        assert registry.get(Language.GO).classify("import_declaration") is None

    def test_node_types_union(self):
        registry = build_registry()
        rust = registry.get(Language.RUST)
        assert {"function_item", "struct_item", "impl_item"} <= rust.node_types

    def test_go_type_declaration(self):
        registry = build_registry()
        go = registry.get(Language.GO)
        assert go.classify("type_declaration") == DefinitionKind.TYPE
