"""Structlog implementation of the ConfigObserver port."""

import structlog


class StructlogConfigObserver:
    """Delegates config domain events to structlog.

    Satisfies the ConfigObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def config_loaded(self, run_id: str | None, benchmark: str, provider: str) -> None:
        self._log.info(
            "config.loaded", run_id=run_id, benchmark=benchmark, provider=provider
        )

    def config_model_temperature_warning(self, temperature: float) -> None:
        self._log.warning(
            "config.model_temperature_warning",
            temperature=temperature,
            message="Model temperature > 0.0 makes answers and verdicts non-reproducible",
        )
