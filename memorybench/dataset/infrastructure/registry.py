"""create_dataset_loader — maps a benchmark name to its DatasetLoader."""

from collections.abc import Callable

from memorybench.dataset.domain.loader import DatasetLoader
from memorybench.dataset.domain.observer import DatasetObserver
from memorybench.dataset.infrastructure.errors import BenchmarkNotSupportedError
from memorybench.dataset.infrastructure.jsonl_loader import JsonlDatasetLoader
from memorybench.dataset.infrastructure.locomo import LoCoMoLoader
from memorybench.dataset.infrastructure.longmemeval import LongMemEvalLoader
from memorybench.dataset.infrastructure.nolima import NoLiMaLoader

_LOADERS: dict[str, Callable[[DatasetObserver], DatasetLoader]] = {
    "longmemeval": LongMemEvalLoader,
    "locomo": LoCoMoLoader,
    "nolima": NoLiMaLoader,
    "jsonl": JsonlDatasetLoader,
}


def supported_benchmarks() -> list[str]:
    return sorted(_LOADERS)


def create_dataset_loader(benchmark: str, observer: DatasetObserver) -> DatasetLoader:
    """Return the DatasetLoader for benchmark.

    Raises:
        BenchmarkNotSupportedError: if no loader is registered under that name.
    """
    factory = _LOADERS.get(benchmark.lower())
    if factory is None:
        raise BenchmarkNotSupportedError(
            benchmark=benchmark, supported=supported_benchmarks()
        )
    return factory(observer)
