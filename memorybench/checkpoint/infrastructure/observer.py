"""Structlog implementation of the CheckpointObserver port."""

import structlog


class StructlogCheckpointObserver:
    """Satisfies the CheckpointObserver protocol structurally."""

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def checkpoint_loaded(
        self, run_id: str, phase: str, last_processed_index: int
    ) -> None:
        self._log.info(
            "checkpoint.loaded",
            run_id=run_id,
            phase=phase,
            last_processed_index=last_processed_index,
        )

    def checkpoint_saved(
        self, run_id: str, phase: str, last_processed_index: int
    ) -> None:
        self._log.debug(
            "checkpoint.saved",
            run_id=run_id,
            phase=phase,
            last_processed_index=last_processed_index,
        )
