"""JSON file state adapter."""

import json
import logging
import os
from pathlib import Path

from diary.errors import CorruptStateError, StateNotFoundError, StorageIOError

logger = logging.getLogger(__name__)


class JsonFileRepository:
    """
    JSON file state storage.

    Implements StateRepository protocol. The whole store lives in one file,
    rewritten as a complete snapshot on every save.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def read(self) -> dict:
        """Read the snapshot. Raises StateNotFoundError if the file is absent."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise StateNotFoundError(f"No diary file at {self.path}")
        except UnicodeDecodeError as e:
            raise CorruptStateError(f"{self.path} is not valid UTF-8: {e}") from e
        except OSError as e:
            logger.error(f"Failed to read {self.path}: {e}")
            raise StorageIOError(f"Could not read {self.path}: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStateError(f"{self.path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise CorruptStateError(f"{self.path} does not contain a JSON object")
        return data

    def write(self, state: dict) -> None:
        """Write the snapshot to a temp file and rename it into place."""
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(state, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except OSError as e:
            if tmp.exists():
                tmp.unlink()
            logger.error(f"Failed to write {self.path}: {e}")
            raise StorageIOError(f"Could not write {self.path}: {e}") from e
