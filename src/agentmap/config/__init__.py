"""Configuration loading, schema, and defaults."""

from agentmap.config.loader import ConfigError, load_config
from agentmap.config.schema import AgentMapConfig, DiffConfig, OutputConfig, ScanConfig

__all__ = [
    "AgentMapConfig",
    "ConfigError",
    "DiffConfig",
    "OutputConfig",
    "ScanConfig",
    "load_config",
]
