"""Load and merge configuration from .agentmap.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from agentmap.config.schema import (
    OUTPUT_FORMATS,
    AgentMapConfig,
    DiffConfig,
    OutputConfig,
    ScanConfig,
)

CONFIG_FILENAME = ".agentmap.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _positive_int(val: str) -> Optional[int]:
    try:
        number = int(val)
    except ValueError:
        return None
    return number if number > 0 else None


def _merge_env_overrides(cfg: AgentMapConfig) -> None:
    """Apply AGENTMAP_* environment variable overrides."""
    if val := os.environ.get("AGENTMAP_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("AGENTMAP_MAX_DEFS"):
        if (number := _positive_int(val)) is not None:
            cfg.output.max_defs = number
    if val := os.environ.get("AGENTMAP_MAX_FILES"):
        if (number := _positive_int(val)) is not None:
            cfg.scan.max_files = number
    if val := os.environ.get("AGENTMAP_WORKERS"):
        if (number := _positive_int(val)) is not None:
            cfg.scan.workers = number
    if os.environ.get("AGENTMAP_DIFF") == "1":
        cfg.diff.enabled = True
    if val := os.environ.get("AGENTMAP_DIFF_BASE"):
        cfg.diff.base = val.strip()
    if val := os.environ.get("AGENTMAP_IGNORE"):
        cfg.scan.ignore.extend(p.strip() for p in val.split(os.pathsep) if p.strip())


def _default_of(f: dataclasses.Field) -> Any:
    if f.default_factory is not dataclasses.MISSING:
        return f.default_factory()
    return f.default


def _check_type(section: str, key: str, value: Any, default: Any) -> None:
    """Raise ConfigError unless *value* has the same type as the field default."""
    if isinstance(default, bool):
        ok, expected = isinstance(value, bool), "a boolean"
    elif isinstance(default, int):
        ok, expected = isinstance(value, int) and not isinstance(value, bool), "an integer"
    elif isinstance(default, list):
        ok = isinstance(value, list) and all(isinstance(v, str) for v in value)
        expected = "a list of strings"
    else:
        ok, expected = isinstance(value, str), "a string"
    if not ok:
        raise ConfigError(f"{section}.{key} must be {expected}, got {value!r}")


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    fields = {f.name: f for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in fields}
    for key, value in filtered.items():
        _check_type(section, key, value, _default_of(fields[key]))
    return cls(**filtered)


def _validate(cfg: AgentMapConfig) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"Unknown output format: {cfg.output.format!r}")
    if cfg.output.max_defs < 1:
        raise ConfigError("output.max_defs must be at least 1")
    if cfg.scan.workers < 1:
        raise ConfigError("scan.workers must be at least 1")
    if cfg.scan.max_files < 1:
        raise ConfigError("scan.max_files must be at least 1")


def load_config(
    root: Path,
    config_override: Optional[str] = None,
) -> AgentMapConfig:
    """Load, validate, and return an AgentMapConfig."""
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = AgentMapConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = AgentMapConfig(
            version=str(raw.get("version", "1.0")),
            scan=_build_section(raw, ScanConfig, "scan"),
            diff=_build_section(raw, DiffConfig, "diff"),
            output=_build_section(raw, OutputConfig, "output"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
