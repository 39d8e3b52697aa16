"""Structural definition extraction and file descriptions."""

from agentmap.extract.definitions import extract_definitions
from agentmap.extract.markdown import describe_markdown, describe_markdown_file
from agentmap.extract.marker import extract_header
from agentmap.extract.models import (
    MIN_BODY_LINES,
    ChangeStatus,
    Definition,
    DefinitionDiff,
    Visibility,
)

__all__ = [
    "MIN_BODY_LINES",
    "ChangeStatus",
    "Definition",
    "DefinitionDiff",
    "Visibility",
    "describe_markdown",
    "describe_markdown_file",
    "extract_definitions",
    "extract_header",
]
