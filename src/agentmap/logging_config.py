"""
agentmap Logging Configuration

Configures the ``agentmap`` logger tree. Every module asks for a component
logger through ``get_logger`` so that levels and handlers are set in one
place by the CLI.

Environment:
- AGENTMAP_DEBUG: Enable debug logging (default: false)
- AGENTMAP_LOG_FILE: Optional log file path
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    debug: Optional[bool] = None,
    log_file: Optional[str] = None,
    verbose: bool = False,
) -> logging.Logger:
    """
    Configure logging for agentmap.

    Args:
        debug: Enable debug level. Defaults to AGENTMAP_DEBUG env var.
        log_file: Log file path. Defaults to AGENTMAP_LOG_FILE env var,
                  no file logging when unset.
        verbose: Lower the threshold to INFO when not debugging.

    Returns:
        Root logger for agentmap
    """
    if debug is None:
        debug = os.environ.get("AGENTMAP_DEBUG", "").lower() in ("true", "1", "yes")
    if log_file is None:
        log_file = os.environ.get("AGENTMAP_LOG_FILE") or None

    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)

    logger = logging.getLogger("agentmap")
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(level)
    logger.addHandler(stderr_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)
        logger.debug("Logging to file: %s", log_path)

    return logger


def get_logger(component: str) -> logging.Logger:
    """
    Get a logger for a specific component.

    Args:
        component: Component name (e.g., "scanner", "git", "parser")

    Returns:
        Logger instance for the component
    """
    return logging.getLogger(f"agentmap.{component}")
