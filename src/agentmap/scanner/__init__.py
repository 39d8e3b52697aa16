"""Scanner — file discovery and per-file mapping on a worker pool."""

from agentmap.scanner.engine import ScanError, TooManyFiles, process_file, scan_directory
from agentmap.scanner.models import FileResult, ScanResult

__all__ = [
    "FileResult",
    "ScanError",
    "ScanResult",
    "TooManyFiles",
    "process_file",
    "scan_directory",
]
