"""Phase-level errors raised by the pipeline; each one aborts the run."""

from memorybench.core.errors import MemoryBenchError


class PrerequisitePhaseIncompleteError(MemoryBenchError):
    """Raised when a phase starts but the phase it depends on has not completed."""

    def __init__(self, phase: str, prerequisite: str, detail: str) -> None:
        self.phase = phase
        self.prerequisite = prerequisite
        super().__init__(
            f"Failed to start {phase}: {prerequisite} phase is incomplete ({detail}). "
            f"Run the {prerequisite} phase for this run id first."
        )


class InvalidPhaseTransitionError(MemoryBenchError):
    """Raised when the pipeline is asked to move backwards."""

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(
            f"Failed to transition pipeline from {current} to {target}: "
            "phases only move forward."
        )


class IngestAbortedError(MemoryBenchError):
    """Raised when a container cannot be ingested even after retries.

    The ingest checkpoint is saved before this is raised, so a later run with
    the same run id resumes at the failed container.
    """

    def __init__(self, container_tag: str, reason: str) -> None:
        self.container_tag = container_tag
        super().__init__(f"Failed to ingest container {container_tag!r}: {reason}")
