"""Fake ConfigObserver for use in tests — records events without mocking."""


class FakeConfigObserver:
    def __init__(self) -> None:
        self.loaded: list[dict[str, str | None]] = []
        self.warnings: list[dict[str, str]] = []

    def config_loaded(self, run_id: str | None, benchmark: str, provider: str) -> None:
        self.loaded.append({"run_id": run_id, "benchmark": benchmark, "provider": provider})

    def config_model_temperature_warning(self, temperature: float) -> None:
        self.warnings.append({"temperature": str(temperature)})
