"""Built-in language tables — aggregate all grammars."""

from agentmap.languages.builtin.cpp import CPP
from agentmap.languages.builtin.go import GO
from agentmap.languages.builtin.javascript import JAVASCRIPT
from agentmap.languages.builtin.python import PYTHON
from agentmap.languages.builtin.rust import RUST
from agentmap.languages.builtin.typescript import TYPESCRIPT
from agentmap.languages.builtin.zig import ZIG
from agentmap.languages.models import LanguageSpec

ALL_BUILTIN_LANGUAGES: list[LanguageSpec] = [
    TYPESCRIPT,
    JAVASCRIPT,
    PYTHON,
    RUST,
    GO,
    ZIG,
    CPP,
]

__all__ = ["ALL_BUILTIN_LANGUAGES"]
