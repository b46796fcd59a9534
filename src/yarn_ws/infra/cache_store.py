"""Infrastructure: JSON-file key-value cache.

The whole cache is one JSON object on disk.  :meth:`JsonFileCacheStore.save`
merges entries into it and replaces the file in one ``os.replace`` so
readers never observe half of a multi-key update.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from yarn_ws.core.models import CacheEntry, CacheValue
from yarn_ws.exceptions import CacheStoreError

logger = logging.getLogger(__name__)


class JsonFileCacheStore:
    """Concrete :class:`~yarn_ws.core.protocols.CacheStore` backed by a file."""

    def __init__(self, path: Path) -> None:
        self._path: Path = path

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> CacheValue:
        return self._read().get(key)

    def save(self, entries: Sequence[CacheEntry]) -> None:
        data = self._read()
        for entry in entries:
            data[entry.key] = entry.value

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=self._path.name, suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise CacheStoreError(
                f"Cannot write cache file {self._path}: {exc}",
                hint="Set YARN_WS_CACHE_FILE to a writable location.",
            ) from exc
        logger.debug("Saved %s to %s", [entry.key for entry in entries], self._path)

    def _read(self) -> dict[str, Any]:
        """Return the stored object; a missing or corrupt file reads as empty."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise CacheStoreError(f"Cannot read cache file {self._path}: {exc}") from exc

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring corrupt cache file %s", self._path)
            return {}
        return data if isinstance(data, dict) else {}
