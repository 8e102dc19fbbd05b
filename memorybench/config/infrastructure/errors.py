"""Error types raised while loading configuration and startup inputs."""

from pathlib import Path

from memorybench.core.errors import MemoryBenchError


class ConfigError(MemoryBenchError):
    """Base class for startup failures: bad config, credentials or dataset."""


class MissingEnvVarsError(ConfigError):
    """Raised when one or more referenced environment variables are not set."""

    def __init__(self, missing_vars: list[str]) -> None:
        self.missing_vars = missing_vars
        var_list = ", ".join(sorted(missing_vars))
        super().__init__(
            f"Failed to load config: missing environment variables: {var_list}"
        )


class ConfigValidationError(ConfigError):
    """Raised when the loaded config does not match the schema."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to validate config: {reason}")


class ConfigLoadError(ConfigError):
    """Raised when the config file cannot be opened or parsed."""

    def __init__(self, path: Path, reason: str = "file not found") -> None:
        self.path = path
        super().__init__(f"Failed to load config: {reason}: {path}")
