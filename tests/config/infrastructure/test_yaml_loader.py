"""Tests for YAML config loading infrastructure."""

from pathlib import Path
from typing import Any

import pytest

from memorybench.config.domain.config import BenchConfig
from memorybench.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)
from memorybench.config.infrastructure.yaml_loader import YamlConfigLoader
from tests.config.fake_observer import FakeConfigObserver

# __file__ is tests/config/infrastructure/test_yaml_loader.py
FIXTURES = Path(__file__).parent.parent.parent / "fixtures"

MINIMAL = """
benchmark:
  name: longmemeval
  path: data.json
provider:
  name: fullcontext
models:
  answering: [gpt-4o]
  judge: [gpt-4o]
"""


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def _load(
    path: Path,
    overrides: dict[str, Any] | None = None,
    observer: FakeConfigObserver | None = None,
) -> BenchConfig:
    return YamlConfigLoader(observer=observer or FakeConfigObserver()).load(
        path=path, overrides=overrides
    )


class TestValidConfigLoading:
    """A valid YAML config loads correctly with all fields populated."""

    def test_loads_benchmark(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUPERMEMORY_API_KEY", "sm-secret")
        cfg = _load(FIXTURES / "valid_config.yaml")

        assert cfg.run_id == "locomo-smoke"
        assert cfg.benchmark.name == "locomo"
        assert cfg.benchmark.path == Path("./data/locomo10.json")
        assert cfg.benchmark.limit == 20
        assert cfg.benchmark.categories == ["multi-hop", "temporal"]

    def test_interpolates_env_vars_and_defaults(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SUPERMEMORY_API_KEY", "sm-secret")
        monkeypatch.delenv("SUPERMEMORY_BASE_URL", raising=False)
        cfg = _load(FIXTURES / "valid_config.yaml")

        assert cfg.provider.api_key == "sm-secret"
        assert cfg.provider.base_url == "https://api.supermemory.ai"

    def test_loads_execution(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUPERMEMORY_API_KEY", "sm-secret")
        cfg = _load(FIXTURES / "valid_config.yaml")

        assert cfg.execution.checkpoint_every == 5
        assert cfg.execution.request_interval_seconds == 0.5
        assert cfg.execution.retry.max_attempts == 3
        assert cfg.execution.retry.initial_backoff_seconds == 2.0
        assert cfg.execution.retry.max_backoff_seconds == 60.0

    def test_loads_context_and_search(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUPERMEMORY_API_KEY", "sm-secret")
        cfg = _load(FIXTURES / "valid_config.yaml")

        assert cfg.context.budget_chars == 80_000
        assert cfg.search.limit == 15
        assert cfg.search.threshold == 0.5

    def test_emits_config_loaded_event(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUPERMEMORY_API_KEY", "sm-secret")
        observer = FakeConfigObserver()
        _load(FIXTURES / "valid_config.yaml", observer=observer)

        assert observer.loaded == [
            {"run_id": "locomo-smoke", "benchmark": "locomo", "provider": "supermemory"}
        ]


class TestDefaults:
    def test_minimal_config_gets_defaults(self, tmp_path: Path) -> None:
        cfg = _load(_write(tmp_path, MINIMAL))

        assert cfg.run_id is None
        assert cfg.search.limit == 10
        assert cfg.search.threshold == 0.3
        assert cfg.context.max_context_tokens == 30_000
        assert cfg.context.chars_per_token == 4
        assert cfg.execution.checkpoint_every == 10
        assert cfg.execution.request_interval_seconds == 1.0
        assert cfg.phases.skip_ingest is False


class TestOverrides:
    def test_overrides_replace_file_values(self, tmp_path: Path) -> None:
        cfg = _load(
            _write(tmp_path, MINIMAL),
            overrides={
                "run_id": "cli-run",
                "benchmark": {"limit": 3},
                "phases": {"skip_ingest": True},
                "models": {"answering": ["claude-3-5-sonnet"]},
            },
        )

        assert cfg.run_id == "cli-run"
        assert cfg.benchmark.limit == 3
        assert cfg.benchmark.name == "longmemeval"
        assert cfg.phases.skip_ingest is True
        assert cfg.models.answering == ["claude-3-5-sonnet"]
        assert cfg.models.judge == ["gpt-4o"]

    def test_none_overrides_are_ignored(self, tmp_path: Path) -> None:
        cfg = _load(
            _write(tmp_path, MINIMAL),
            overrides={"run_id": None, "provider": {"name": None}},
        )

        assert cfg.run_id is None
        assert cfg.provider.name == "fullcontext"


class TestTemperatureWarning:
    def test_nonzero_temperature_warns(self, tmp_path: Path) -> None:
        observer = FakeConfigObserver()
        _load(
            _write(tmp_path, MINIMAL + "  temperature: 0.7\n"),
            observer=observer,
        )

        assert observer.warnings == [{"temperature": "0.7"}]

    def test_zero_temperature_does_not_warn(self, tmp_path: Path) -> None:
        observer = FakeConfigObserver()
        _load(_write(tmp_path, MINIMAL), observer=observer)

        assert observer.warnings == []


class TestErrors:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError, match="file not found"):
            _load(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError, match="invalid YAML"):
            _load(_write(tmp_path, "benchmark: [unclosed"))

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigValidationError):
            _load(_write(tmp_path, "- just\n- a list\n"))

    def test_all_missing_env_vars_reported(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("MB_KEY_A", raising=False)
        monkeypatch.delenv("MB_KEY_B", raising=False)
        text = MINIMAL.replace(
            "name: fullcontext", "name: mem0\n  api_key: ${MB_KEY_A}\n  base_url: ${MB_KEY_B}"
        )

        with pytest.raises(MissingEnvVarsError) as excinfo:
            _load(_write(tmp_path, text))

        assert sorted(excinfo.value.missing_vars) == ["MB_KEY_A", "MB_KEY_B"]

    def test_missing_models_rejected(self, tmp_path: Path) -> None:
        text = MINIMAL.replace("  judge: [gpt-4o]\n", "  judge: []\n")
        with pytest.raises(ConfigValidationError):
            _load(_write(tmp_path, text))

    def test_unsafe_run_id_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigValidationError):
            _load(_write(tmp_path, "run_id: ../escape\n" + MINIMAL))
