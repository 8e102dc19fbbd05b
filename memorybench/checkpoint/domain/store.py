"""CheckpointStore Protocol — durable storage for checkpoints."""

from typing import Protocol

from memorybench.checkpoint.domain.checkpoint import Checkpoint


class CheckpointStore(Protocol):
    def load(self, run_id: str, phase: str) -> Checkpoint | None:
        """Return the saved checkpoint, or None if the phase never saved one."""
        ...

    def save(self, checkpoint: Checkpoint) -> None:
        """Overwrite the stored checkpoint for (checkpoint.run_id, checkpoint.phase)."""
        ...
