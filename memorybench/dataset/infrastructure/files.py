"""File helpers shared by the benchmark loaders."""

import json
from pathlib import Path
from typing import Any

from memorybench.dataset.infrastructure.errors import DatasetLoadError


def read_json(path: Path) -> Any:
    """Parse a whole JSON file, mapping I/O and syntax failures to DatasetLoadError."""
    try:
        with open(path, encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError as exc:
        raise DatasetLoadError(reason=f"file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise DatasetLoadError(reason=f"invalid JSON in {path}: {exc}") from exc


def read_json_list(path: Path) -> list[Any]:
    data = read_json(path)
    if not isinstance(data, list):
        raise DatasetLoadError(reason=f"expected a JSON array in {path}")
    return data
