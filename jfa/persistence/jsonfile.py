"""JSON data files.

Every store keeps its whole collection in one JSON document. Writes go to a
temporary file in the same directory which then replaces the original, so
a reader only ever sees the old or the new document.
"""

import asyncio
import json
import os
import tempfile
import time
from pathlib import Path
from typing import Any

import logfire

from jfa.persistence.error import PersistenceError


class JsonFile:
    """One JSON document on disk, with a short read cache."""

    def __init__(self, path: Path, cache_seconds: float = 0.0) -> None:
        """Initialize file handle.

        Args:
            path: Location of the document
            cache_seconds: How long a read stays fresh; a write always
                invalidates it
        """
        self.path = path
        self.cache_seconds = cache_seconds
        self._data: Any = None
        self._read_at: float | None = None

    @property
    def fresh(self) -> bool:
        """True if the last read is recent and nothing was written since."""
        if self._read_at is None:
            return False
        return time.monotonic() - self._read_at < self.cache_seconds

    async def read(self, default: Any = None) -> Any:
        """Return the document, reading it from disk unless the cache is fresh.

        A missing or empty file reads as ``default``.

        Raises:
            PersistenceError: If the file exists but cannot be parsed
        """
        if self.fresh:
            return self._data
        data = await asyncio.to_thread(self._read_sync)
        self._data = default if data is None else data
        self._read_at = time.monotonic()
        return self._data

    async def write(self, data: Any) -> None:
        """Atomically replace the document.

        Raises:
            PersistenceError: If the document could not be written; the
                file on disk is left untouched
        """
        self._read_at = None
        await asyncio.to_thread(self._write_sync, data)

    def invalidate(self) -> None:
        self._read_at = None

    def _read_sync(self) -> Any:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logfire.error("Failed to read {path}", path=str(self.path))
            raise PersistenceError(f"Failed to read {self.path}: {e}") from e
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logfire.error("Failed to parse {path}", path=str(self.path))
            raise PersistenceError(f"Failed to parse {self.path}: {e}") from e

    def _write_sync(self, data: Any) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                json.dump(data, tmp, indent=4)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logfire.error("Failed to write {path}", path=str(self.path))
            logfire.debug("Error: {error}", error=str(e))
            raise PersistenceError(f"Failed to write {self.path}: {e}") from e
