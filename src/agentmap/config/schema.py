"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

OutputFormat = Literal["yaml", "json"]

OUTPUT_FORMATS: tuple[str, ...] = ("yaml", "json")

DEFAULT_MAX_DEFS = 25
DEFAULT_MAX_FILES = 10_000
DEFAULT_WORKERS = 8


@dataclass
class ScanConfig:
    ignore: List[str] = field(default_factory=list)  # fnmatch globs, relative paths
    max_files: int = DEFAULT_MAX_FILES  # above this the scan returns nothing
    workers: int = DEFAULT_WORKERS
    require_description: bool = True  # skip source files without a header comment


@dataclass
class DiffConfig:
    enabled: bool = False
    base: str = "HEAD"
    staged: bool = False  # compare the index instead of the working tree


@dataclass
class OutputConfig:
    format: OutputFormat = "yaml"
    max_defs: int = DEFAULT_MAX_DEFS


@dataclass
class AgentMapConfig:
    version: str = "1.0"
    scan: ScanConfig = field(default_factory=ScanConfig)
    diff: DiffConfig = field(default_factory=DiffConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
