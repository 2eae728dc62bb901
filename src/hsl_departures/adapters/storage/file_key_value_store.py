"""File-backed key-value store shared between processes."""

import logging
import os
import tempfile
from pathlib import Path
from urllib.parse import quote

from hsl_departures.domain.ports.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class FileKeyValueStore(KeyValueStore):
    """Stores each key as one file in a directory.

    Writes go to a temporary file that replaces the target atomically, so a
    reader in another process sees either the old or the new blob.
    """

    def __init__(self, directory: str | Path) -> None:
        """Initialize the store, creating the directory if needed."""
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / quote(key, safe="")

    def get(self, key: str) -> bytes | None:
        """Return the stored bytes, or None if absent or unreadable."""
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Failed to read key {key!r} from {path}: {e}")
            return None

    def set(self, key: str, value: bytes) -> None:
        """Store bytes under a key, replacing the previous file atomically."""
        path = self._path(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=".tmp-")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove(self, key: str) -> None:
        """Remove a key if present."""
        self._path(key).unlink(missing_ok=True)
