from __future__ import annotations

import logging
import re
from pathlib import Path

from catchup.application.exceptions import LocalStorageError
from catchup.application.ports.local_storage import LocalStoragePort

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class JsonFileLocalStorage(LocalStoragePort):
    """One file per key under `data_dir`. Values are stored verbatim (callers write JSON)."""

    def __init__(self, data_dir: str = "./data/local_storage") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._logger = logging.getLogger(__name__)

    def _get_file_path(self, key: str) -> Path:
        """Get the file path for a key."""
        return self._data_dir / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def get_item(self, key: str) -> str | None:
        file_path = self._get_file_path(key)
        if not file_path.exists():
            return None
        # An unreadable slot must not look empty, or the next write would replace it
        try:
            return file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self._logger.error("Failed to read local storage slot", extra={"key": key, "error": str(e)})
            raise LocalStorageError(f"Failed to read local storage slot {key!r}: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        """Write the slot atomically."""
        file_path = self._get_file_path(key)
        temp_path = file_path.with_suffix(".json.tmp")

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(value)
            temp_path.replace(file_path)
        except OSError as e:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass
            raise LocalStorageError(f"Failed to write local storage slot {key!r}: {e}") from e

    def remove_item(self, key: str) -> None:
        file_path = self._get_file_path(key)
        try:
            file_path.unlink(missing_ok=True)
        except OSError as e:
            raise LocalStorageError(f"Failed to remove local storage slot {key!r}: {e}") from e
