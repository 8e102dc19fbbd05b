"""Error types raised by language model infrastructure."""

from memorybench.core.errors import MemoryBenchError


class ModelInvocationError(MemoryBenchError):
    """Raised when a model call fails or returns no content."""

    def __init__(self, model: str, reason: str, retriable: bool = False) -> None:
        self.model = model
        super().__init__(f"Failed to call model {model}: {reason}", retriable=retriable)
