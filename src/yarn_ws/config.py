"""Runtime settings for yarn-ws.

Settings are resolved once at start-up from the process environment and
the ``--cwd`` flag, then passed down explicitly.  Nothing else in the
package reads environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

YARN_BIN_ENV: str = "YARN_WS_YARN_BIN"
CACHE_FILE_ENV: str = "YARN_WS_CACHE_FILE"
LOG_LEVEL_ENV: str = "YARN_WS_LOG_LEVEL"

MANIFEST_FILENAME: str = "package.json"
CACHE_FILENAME: str = ".yarn-ws-cache.json"


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved configuration for one yarn-ws process."""

    project_root: Path
    """Directory containing the root ``package.json``; yarn runs here."""

    manifest_file: Path
    """Absolute path of the root project manifest."""

    cache_file: Path
    """JSON file backing the persisted selection."""

    yarn_bin: str
    """Executable name or path used for every yarn invocation."""

    @classmethod
    def from_env(
        cls,
        cwd: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Settings:
        """Build settings from *environ* (default ``os.environ``)."""
        env = os.environ if environ is None else environ
        root = Path(cwd).resolve() if cwd is not None else Path.cwd()

        cache_override = env.get(CACHE_FILE_ENV)
        cache_file = (
            Path(cache_override).expanduser()
            if cache_override
            else root / CACHE_FILENAME
        )

        return cls(
            project_root=root,
            manifest_file=root / MANIFEST_FILENAME,
            cache_file=cache_file,
            yarn_bin=env.get(YARN_BIN_ENV) or "yarn",
        )
