"""Observer port for checkpoint storage — defines events in domain language."""

from typing import Protocol


class CheckpointObserver(Protocol):
    def checkpoint_loaded(
        self, run_id: str, phase: str, last_processed_index: int
    ) -> None: ...

    def checkpoint_saved(
        self, run_id: str, phase: str, last_processed_index: int
    ) -> None: ...
