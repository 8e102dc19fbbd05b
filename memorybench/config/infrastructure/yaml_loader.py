"""YAML config loader — parses, interpolates env vars, validates, and emits observer events."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from memorybench.config.domain.config import BenchConfig
from memorybench.config.domain.observer import ConfigObserver
from memorybench.config.infrastructure.env_interpolation import (
    collect_missing_vars,
    interpolate,
)
from memorybench.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)


class YamlConfigLoader:
    """Loads, interpolates, validates, and returns a BenchConfig from a YAML file."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path, overrides: dict[str, Any] | None = None) -> BenchConfig:
        """
        Load, interpolate, validate, and return a BenchConfig from a YAML file.

        overrides is a nested mapping merged over the file contents after
        interpolation; the CLI uses it for command-line flags.

        Raises:
            ConfigLoadError: if the file is missing or is not valid YAML.
            MissingEnvVarsError: if any ${ENV_VAR} references are unset (all collected first).
            ConfigValidationError: if the document does not match the schema.
        """
        raw = _parse_yaml(path=path)
        _check_missing_env_vars(raw=raw)
        interpolated = interpolate(raw)
        merged = _merge(base=interpolated, overrides=overrides or {})
        cfg = _build_config(resolved=merged)
        _emit_warnings(cfg=cfg, observer=self._observer)
        self._observer.config_loaded(
            run_id=cfg.run_id,
            benchmark=cfg.benchmark.name,
            provider=cfg.provider.name,
        )
        return cfg


def _parse_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason=f"invalid YAML ({exc})") from exc

    if not isinstance(data, dict):
        raise ConfigValidationError("top-level document must be a mapping")
    return data


def _check_missing_env_vars(raw: Any) -> None:
    """Raise MissingEnvVarsError if any ${ENV_VAR} references in raw are unset."""
    missing = collect_missing_vars(raw)
    if missing:
        raise MissingEnvVarsError(missing)


def _merge(base: Any, overrides: dict[str, Any]) -> Any:
    """Recursively merge overrides into base; override values of None are ignored."""
    if not isinstance(base, dict):
        return overrides
    merged = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, dict):
            merged[key] = _merge(base=merged.get(key, {}), overrides=value)
        else:
            merged[key] = value
    return merged


def _build_config(resolved: Any) -> BenchConfig:
    try:
        return BenchConfig.model_validate(resolved)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc


def _emit_warnings(cfg: BenchConfig, observer: ConfigObserver) -> None:
    if cfg.models.temperature > 0.0:
        observer.config_model_temperature_warning(cfg.models.temperature)
