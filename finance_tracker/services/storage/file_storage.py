"""
File-backed Key-Value Storage

DESIGN DECISION: One file per key inside a data directory.
1. A corrupt value only affects its own key
2. Users can inspect or back up their data with any text editor
3. Writes are atomic (temp file + os.replace), so a crash mid-write
   leaves the previous value intact

TRADEOFFS:
- No cross-key transactions (the store writes expenses and income separately)
- Last writer wins
"""

import os
import re
from pathlib import Path
from typing import Optional, Union

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from finance_tracker.services.storage.interface import (
    InvalidKeyError,
    KeyValueStorageInterface,
    StorageError,
)


_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")
_SUFFIX = ".json"


class FileKeyValueStorage(KeyValueStorageInterface):
    """
    Stores each key as `<data_dir>/<key>.json`.

    Transient OS errors on write are retried before giving up.
    """

    def __init__(
        self,
        data_dir: Union[str, Path],
        write_attempts: int = 3,
    ):
        self._data_dir = Path(data_dir).expanduser()
        self._write_attempts = write_attempts

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path_for(self, key: str) -> Path:
        if not key or not _KEY_PATTERN.match(key) or key in {".", ".."}:
            raise InvalidKeyError(f"Invalid storage key: {key!r}")
        return self._data_dir / f"{key}{_SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read '{key}' from {path}: {e}") from e

    def set(self, key: str, value: str) -> bool:
        path = self._path_for(key)
        writer = retry(
            stop=stop_after_attempt(self._write_attempts),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )(self._write_atomic)
        try:
            writer(path, value)
        except OSError as e:
            raise StorageError(f"Failed to write '{key}' to {path}: {e}") from e
        return True

    def _write_atomic(self, path: Path, value: str) -> None:
        """Write to a sibling temp file, then swap it into place."""
        self._data_dir.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
