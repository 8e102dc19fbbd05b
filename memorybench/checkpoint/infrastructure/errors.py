"""Error types raised by checkpoint storage."""

from pathlib import Path

from memorybench.core.errors import MemoryBenchError


class CheckpointWriteError(MemoryBenchError):
    """Raised when a checkpoint file cannot be written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to write checkpoint {path}: {reason}")


class CheckpointReadError(MemoryBenchError):
    """Raised when a checkpoint file exists but cannot be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to read checkpoint {path}: {reason}")
