"""JsonCheckpointStore — one JSON file per (run, phase), replaced atomically on save."""

import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from memorybench.checkpoint.domain.checkpoint import Checkpoint
from memorybench.checkpoint.domain.observer import CheckpointObserver
from memorybench.checkpoint.infrastructure.errors import (
    CheckpointReadError,
    CheckpointWriteError,
)


def checkpoint_path(root: Path, run_id: str, phase: str) -> Path:
    return root / run_id / "checkpoints" / f"{phase}.json"


class JsonCheckpointStore:
    """Stores checkpoints under {root}/{run_id}/checkpoints/{phase}.json.

    Saves write a temporary file in the same directory and rename it over the
    old one, so a crash mid-write leaves the previous checkpoint intact.
    Satisfies the CheckpointStore protocol structurally.
    """

    def __init__(self, root: Path, observer: CheckpointObserver) -> None:
        self._root = root
        self._observer = observer

    def load(self, run_id: str, phase: str) -> Checkpoint | None:
        path = checkpoint_path(self._root, run_id, phase)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise CheckpointReadError(path=path, reason=str(exc)) from exc

        try:
            checkpoint = Checkpoint.model_validate_json(text)
        except ValidationError as exc:
            raise CheckpointReadError(path=path, reason=str(exc)) from exc

        self._observer.checkpoint_loaded(
            run_id=run_id,
            phase=phase,
            last_processed_index=checkpoint.last_processed_index,
        )
        return checkpoint

    def save(self, checkpoint: Checkpoint) -> None:
        path = checkpoint_path(self._root, checkpoint.run_id, checkpoint.phase)
        payload = checkpoint.model_dump_json(by_alias=True, indent=2)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
        except OSError as exc:
            raise CheckpointWriteError(path=path, reason=str(exc)) from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise CheckpointWriteError(path=path, reason=str(exc)) from exc

        self._observer.checkpoint_saved(
            run_id=checkpoint.run_id,
            phase=checkpoint.phase,
            last_processed_index=checkpoint.last_processed_index,
        )
