"""Language registry — extension lookup and per-language capability records."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Dict, List, Optional

from agentmap.languages.models import Language, LanguageSpec


class LanguageRegistry:
    """Central store for all language capability records."""

    def __init__(self) -> None:
        self._specs: Dict[Language, LanguageSpec] = {}
        self._by_extension: Dict[str, Language] = {}

    # ---- registration ----

    def register(self, spec: LanguageSpec) -> None:
        self._specs[spec.language] = spec
        for ext in spec.extensions:
            self._by_extension[ext.lower()] = spec.language

    def register_many(self, specs: list[LanguageSpec]) -> None:
        for s in specs:
            self.register(s)

    # ---- queries ----

    @property
    def all_specs(self) -> List[LanguageSpec]:
        return list(self._specs.values())

    @property
    def extensions(self) -> List[str]:
        return sorted(self._by_extension)

    def get(self, language: Language) -> Optional[LanguageSpec]:
        return self._specs.get(language)

    def detect(self, path: str) -> Optional[Language]:
        """Return the language for *path* by extension, or None."""
        suffix = PurePosixPath(path.replace("\\", "/")).suffix.lower()
        if not suffix:
            return None
        return self._by_extension.get(suffix)

    def for_path(self, path: str) -> Optional[LanguageSpec]:
        language = self.detect(path)
        return self._specs.get(language) if language is not None else None


def build_registry() -> LanguageRegistry:
    """Create a registry holding every built-in language."""
    from agentmap.languages.builtin import ALL_BUILTIN_LANGUAGES

    registry = LanguageRegistry()
    registry.register_many(ALL_BUILTIN_LANGUAGES)
    return registry


_default: Optional[LanguageRegistry] = None


def default_registry() -> LanguageRegistry:
    global _default
    if _default is None:
        _default = build_registry()
    return _default


def detect_language(path: str) -> Optional[Language]:
    return default_registry().detect(path)
