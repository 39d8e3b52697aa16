"""Syntax-tree provider — lazily loaded tree-sitter grammars.

Grammar packages (``tree_sitter_python`` and friends) expose a function
returning a language pointer; wrapping it in ``tree_sitter.Language`` is done
once per (module, function) pair and shared. ``Language`` objects are
immutable, so one cache may serve many threads; ``Parser`` objects are not,
so every parse gets its own.
"""

from __future__ import annotations

import importlib
import threading
from typing import Dict, Optional, Tuple, Union

import tree_sitter

from agentmap.languages.models import Language
from agentmap.languages.registry import LanguageRegistry, default_registry
from agentmap.logging_config import get_logger
from agentmap.parser.errors import ParseError, UnsupportedLanguage

logger = get_logger("parser")


class GrammarCache:
    """``tree_sitter.Language`` objects, loaded on first use."""

    def __init__(self, registry: Optional[LanguageRegistry] = None) -> None:
        self._registry = registry or default_registry()
        self._grammars: Dict[Tuple[str, str], tree_sitter.Language] = {}
        self._lock = threading.Lock()

    def language(self, language: Language) -> tree_sitter.Language:
        """Return the grammar for a registered source *language*."""
        spec = self._registry.get(language)
        if spec is None:
            raise UnsupportedLanguage(f"No grammar registered for {language!r}")
        return self.grammar(spec.grammar_module, spec.grammar_function)

    def grammar(self, module: str, function: str = "language") -> tree_sitter.Language:
        """Return the grammar that ``module.function()`` provides, loading it if needed."""
        key = (module, function)
        cached = self._grammars.get(key)
        if cached is not None:
            return cached
        with self._lock:
            cached = self._grammars.get(key)
            if cached is None:
                cached = self._load(module, function)
                self._grammars[key] = cached
        return cached

    def _load(self, module_name: str, function: str) -> tree_sitter.Language:
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise UnsupportedLanguage(
                f"Grammar package {module_name} is not installed"
            ) from exc
        factory = getattr(module, function, None)
        if factory is None:
            raise UnsupportedLanguage(f"{module_name} has no {function}()")
        logger.debug("Loaded grammar %s.%s()", module_name, function)
        return tree_sitter.Language(factory())

    def is_loaded(self, language: Language) -> bool:
        spec = self._registry.get(language)
        if spec is None:
            return False
        return (spec.grammar_module, spec.grammar_function) in self._grammars

    def reset(self) -> None:
        """Forget every loaded grammar (test isolation)."""
        with self._lock:
            self._grammars.clear()


class SourceParser:
    """Parse source text into a tree-sitter tree."""

    def __init__(self, cache: Optional[GrammarCache] = None) -> None:
        self.cache = cache or default_cache()

    def parse(self, source: Union[str, bytes], language: Language) -> tree_sitter.Tree:
        return self._parse(source, self.cache.language(language), language.value)

    def parse_with(
        self,
        source: Union[str, bytes],
        module: str,
        function: str = "language",
    ) -> tree_sitter.Tree:
        """Parse with a grammar that is not a registered source language."""
        return self._parse(source, self.cache.grammar(module, function), module)

    def _parse(
        self,
        source: Union[str, bytes],
        grammar: tree_sitter.Language,
        label: str,
    ) -> tree_sitter.Tree:
        data = source.encode("utf-8") if isinstance(source, str) else source
        try:
            tree = tree_sitter.Parser(grammar).parse(data)
        except (ValueError, RuntimeError) as exc:
            raise ParseError(f"Failed to parse {label} source: {exc}") from exc
        if tree is None:
            raise ParseError(f"Parser returned no tree for {label} source")
        return tree


_default_cache: Optional[GrammarCache] = None
_default_lock = threading.Lock()


def default_cache() -> GrammarCache:
    """Process-wide cache shared by every parser that is not given its own."""
    global _default_cache
    with _default_lock:
        if _default_cache is None:
            _default_cache = GrammarCache()
        return _default_cache
