"""Observer port for the dataset domain — defines events in domain language."""

from typing import Protocol


class DatasetObserver(Protocol):
    def dataset_loading_started(self, benchmark: str, path: str) -> None: ...

    def dataset_loading_completed(
        self, benchmark: str, path: str, total_items: int
    ) -> None: ...

    def dataset_loading_failed(self, benchmark: str, path: str, reason: str) -> None: ...
