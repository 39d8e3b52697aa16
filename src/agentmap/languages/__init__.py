"""Grammar capability registry — per-language node-kind tables and rules."""

from agentmap.languages.models import (
    Binding,
    DefinitionKind,
    Language,
    LanguageSpec,
    VisibilityRule,
)
from agentmap.languages.registry import (
    LanguageRegistry,
    build_registry,
    default_registry,
    detect_language,
)

__all__ = [
    "Binding",
    "DefinitionKind",
    "Language",
    "LanguageRegistry",
    "LanguageSpec",
    "VisibilityRule",
    "build_registry",
    "default_registry",
    "detect_language",
]
