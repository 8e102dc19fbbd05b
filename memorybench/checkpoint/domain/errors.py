"""Error types raised by the checkpoint domain."""

from memorybench.core.errors import MemoryBenchError


class CheckpointRegressionError(MemoryBenchError):
    """Raised when an update would move last_processed_index backwards or skip an index."""

    def __init__(self, phase: str, last_processed_index: int, index: int) -> None:
        self.phase = phase
        self.last_processed_index = last_processed_index
        self.index = index
        super().__init__(
            f"Failed to advance {phase} checkpoint: expected index"
            f" {last_processed_index + 1}, got {index}"
        )
