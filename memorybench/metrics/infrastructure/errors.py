"""Error types raised while writing reports."""

from pathlib import Path

from memorybench.core.errors import MemoryBenchError


class ReportWriteError(MemoryBenchError):
    """Raised when a report file cannot be written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to write report {path}: {reason}")
