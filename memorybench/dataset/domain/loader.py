"""DatasetLoader Protocol — structural interface for loading benchmark items."""

from typing import Protocol

from memorybench.config.domain.benchmark import BenchmarkConfig
from memorybench.dataset.domain.item import DatasetItem


class DatasetLoader(Protocol):
    """Loads the items of one benchmark as described by BenchmarkConfig."""

    def load(self, config: BenchmarkConfig) -> list[DatasetItem]: ...
