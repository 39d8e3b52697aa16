"""Syntax-tree provider built on tree-sitter."""

from agentmap.parser.errors import ParseError, ParseFailure, UnsupportedLanguage
from agentmap.parser.grammar import GrammarCache, SourceParser, default_cache

__all__ = [
    "GrammarCache",
    "ParseError",
    "ParseFailure",
    "SourceParser",
    "UnsupportedLanguage",
    "default_cache",
]
