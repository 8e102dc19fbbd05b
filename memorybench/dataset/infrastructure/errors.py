"""Error types raised by dataset infrastructure."""

from memorybench.config.infrastructure.errors import ConfigError


class DatasetLoadError(ConfigError):
    """Raised when a dataset file cannot be read or does not have the expected shape."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to load dataset: {reason}")


class BenchmarkNotSupportedError(ConfigError):
    """Raised when the configured benchmark name has no loader."""

    def __init__(self, benchmark: str, supported: list[str]) -> None:
        self.benchmark = benchmark
        super().__init__(
            f"Failed to load dataset: unknown benchmark '{benchmark}'"
            f" (supported: {', '.join(supported)})"
        )
