"""Fake DatasetObserver for use in tests — records events without mocking."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LoadingCompletedEvent:
    benchmark: str
    path: str
    total_items: int


@dataclass(frozen=True)
class LoadingFailedEvent:
    benchmark: str
    path: str
    reason: str


class FakeDatasetObserver:
    def __init__(self) -> None:
        self.started: list[str] = []
        self.completed: list[LoadingCompletedEvent] = []
        self.failed: list[LoadingFailedEvent] = []

    def dataset_loading_started(self, benchmark: str, path: str) -> None:
        self.started.append(benchmark)

    def dataset_loading_completed(
        self, benchmark: str, path: str, total_items: int
    ) -> None:
        self.completed.append(
            LoadingCompletedEvent(benchmark=benchmark, path=path, total_items=total_items)
        )

    def dataset_loading_failed(self, benchmark: str, path: str, reason: str) -> None:
        self.failed.append(LoadingFailedEvent(benchmark=benchmark, path=path, reason=reason))
