"""Data models for extracted definitions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from agentmap.languages.models import DefinitionKind

MIN_BODY_LINES = 5


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class ChangeStatus(str, Enum):
    ADDED = "added"
    UPDATED = "updated"


@dataclass(frozen=True, slots=True)
class DefinitionDiff:
    """How a definition changed relative to the diff baseline."""

    status: ChangeStatus
    added: int = 0
    deleted: int = 0


@dataclass(frozen=True)
class Definition:
    """A named, top-level syntactic unit with a 1-based inclusive line range."""

    name: str
    start_line: int
    end_line: int
    kind: DefinitionKind
    visibility: Visibility = Visibility.PRIVATE
    extern: bool = False
    diff: Optional[DefinitionDiff] = None  # None = unchanged since baseline

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Definition name must be non-empty")
        if not 1 <= self.start_line <= self.end_line:
            raise ValueError(
                f"Invalid range for {self.name}: {self.start_line}-{self.end_line}"
            )

    @property
    def exported(self) -> bool:
        return self.visibility is Visibility.PUBLIC

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1
