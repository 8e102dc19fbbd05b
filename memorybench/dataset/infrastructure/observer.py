"""Structlog implementation of the DatasetObserver port."""

import structlog


class StructlogDatasetObserver:
    """Delegates dataset domain events to structlog.

    Satisfies the DatasetObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def dataset_loading_started(self, benchmark: str, path: str) -> None:
        self._log.info("dataset.loading_started", benchmark=benchmark, path=path)

    def dataset_loading_completed(
        self, benchmark: str, path: str, total_items: int
    ) -> None:
        self._log.info(
            "dataset.loading_completed",
            benchmark=benchmark,
            path=path,
            total_items=total_items,
        )

    def dataset_loading_failed(self, benchmark: str, path: str, reason: str) -> None:
        self._log.error(
            "dataset.loading_failed", benchmark=benchmark, path=path, reason=reason
        )
