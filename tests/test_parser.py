"""Tests for grammar loading and parsing."""

import pytest

from agentmap.languages.models import Language, LanguageSpec
from agentmap.languages.registry import LanguageRegistry
from agentmap.parser.errors import ParseFailure, UnsupportedLanguage
from agentmap.parser.grammar import GrammarCache, SourceParser


class TestGrammarCache:
    def test_loads_lazily_and_caches(self):
        cache = GrammarCache()
        assert not cache.is_loaded(Language.PYTHON)
        first = cache.language(Language.PYTHON)
        assert cache.is_loaded(Language.PYTHON)
        assert cache.language(Language.PYTHON) is first

    def test_reset(self):
        cache = GrammarCache()
        cache.language(Language.GO)
        cache.reset()
        assert not cache.is_loaded(Language.GO)

    def test_unregistered_language(self):
        cache = GrammarCache(LanguageRegistry())
        with pytest.raises(UnsupportedLanguage):
            cache.language(Language.RUST)

    def test_missing_grammar_package(self):
        registry = LanguageRegistry()
        registry.register(LanguageSpec(
            language=Language.RUST,
            extensions=(".rs",),
            grammar_module="tree_sitter_does_not_exist",
            kinds={},
        ))
        with pytest.raises(UnsupportedLanguage):
            GrammarCache(registry).language(Language.RUST)

    def test_grammar_by_module(self):
        cache = GrammarCache()
        block = cache.grammar("tree_sitter_markdown")
        assert cache.grammar("tree_sitter_markdown") is block
        assert cache.grammar("tree_sitter_markdown", "inline_language") is not block

    def test_grammar_missing_function(self):
        with pytest.raises(UnsupportedLanguage):
            GrammarCache().grammar("tree_sitter_python", "no_such_language")

    def test_unsupported_is_parse_failure(self):
        assert issubclass(UnsupportedLanguage, ParseFailure)


class TestSourceParser:
    @pytest.mark.parametrize("language,source", [
        (Language.TYPESCRIPT, "export const x: number = 1\n"),
        (Language.JAVASCRIPT, "const x = 1\n"),
        (Language.PYTHON, "x = 1\n"),
        (Language.RUST, "fn main() {}\n"),
        (Language.GO, "package main\n"),
        (Language.ZIG, "const x = 1;\n"),
        (Language.CPP, "int x = 1;\n"),
    ])
    def test_every_builtin_grammar_parses(self, language, source):
        tree = SourceParser(GrammarCache()).parse(source, language)
        assert tree.root_node.child_count > 0

    def test_accepts_bytes(self):
        tree = SourceParser().parse(b"def f():\n    pass\n", Language.PYTHON)
        assert tree.root_node.children[0].type == "function_definition"

    def test_tsx_dialect(self):
        tree = SourceParser().parse("const el = <div>hi</div>\n", Language.TYPESCRIPT)
        assert not tree.root_node.has_error

    def test_parse_with_module_grammar(self):
        tree = SourceParser().parse_with("# Title\n", "tree_sitter_markdown")
        assert tree.root_node.type == "document"
