"""agentmap: a compact map of a source tree's files and top-level definitions."""

__version__ = "0.4.0"
