"""Infrastructure: root ``package.json`` reader.

Reads the project manifest at most once per instance.  Any read or
parse failure is absorbed: the reader then reports no dependencies and
a generic root node name for the rest of its life.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from yarn_ws.core.models import RootManifest
from yarn_ws.exceptions import ManifestUnreadableError

logger = logging.getLogger(__name__)

DEPENDENCY_SECTIONS: tuple[str, ...] = (
    "dependencies",
    "devDependencies",
    "optionalDependencies",
    "bundledDependencies",
)


class RootManifestReader:
    """Concrete :class:`~yarn_ws.core.protocols.ManifestSource`."""

    def __init__(self, path: Path) -> None:
        self._path: Path = path
        self._manifest: RootManifest | None = None

    def load(self) -> RootManifest:
        if self._manifest is None:
            try:
                self._manifest = read_manifest(self._path)
            except ManifestUnreadableError as exc:
                logger.debug("Ignoring root manifest: %s", exc)
                self._manifest = RootManifest.empty()
        return self._manifest

    def get_root_package_dependencies(self) -> list[str]:
        return list(self.load().dependencies)

    @property
    def root_node_name(self) -> str:
        return self.load().display_name


def read_manifest(path: Path) -> RootManifest:
    """Parse *path* into a :class:`RootManifest`.

    Raises
    ------
    ManifestUnreadableError
        When the file is missing, unreadable, or not a JSON object.
    """
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ManifestUnreadableError(f"Cannot read {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestUnreadableError(f"{path} does not contain a JSON object.")

    names: list[str] = []
    for section in DEPENDENCY_SECTIONS:
        names.extend(_section_names(data.get(section)))

    raw_name = data.get("name")
    return RootManifest(
        name=raw_name if isinstance(raw_name, str) and raw_name else None,
        dependencies=tuple(names),
    )


def _section_names(section: object) -> list[str]:
    """Keys of a dependency mapping; ``bundledDependencies`` may be a list."""
    if isinstance(section, dict):
        return [str(key) for key in section]
    if isinstance(section, list):
        return [item for item in section if isinstance(item, str)]
    return []
