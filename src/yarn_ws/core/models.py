"""Domain models for yarn-ws.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and construction from yarn's raw records.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

DependencyTree = dict[str, Optional["DependencyTree"]]
"""Inverted dependency view: node name → its dependents, or ``None`` for a leaf."""

SELECTED_WORKSPACE_KEY: str = "workspace"
SELECTED_COMMANDS_KEY: str = "workspace.commands"

ROOT_SUFFIX: str = " (root)"
ANONYMOUS_ROOT_NAME: str = "package.json (root)"


# ---------------------------------------------------------------------------
# Workspace metadata
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class WorkspaceInfo:
    """One workspace as reported by ``yarn workspaces info``."""

    name: str
    """Package name of the workspace, unique within the monorepo."""

    location: str | None
    """Path relative to the project root, when reported."""

    workspace_dependencies: tuple[str, ...]
    """Intra-repo dependencies; empty means a root of the dependency tree."""

    mismatched_workspace_dependencies: tuple[str, ...]
    """Workspace dependencies whose version range does not match."""

    @property
    def is_root(self) -> bool:
        return not self.workspace_dependencies

    @classmethod
    def from_record(cls, name: str, record: Mapping[str, Any] | None) -> WorkspaceInfo:
        """Build from the raw per-workspace JSON record.

        Missing or non-list dependency fields are treated as empty.
        """
        record = record or {}
        return cls(
            name=name,
            location=_optional_str(record.get("location")),
            workspace_dependencies=_str_tuple(record.get("workspaceDependencies")),
            mismatched_workspace_dependencies=_str_tuple(
                record.get("mismatchedWorkspaceDependencies"),
            ),
        )


# ---------------------------------------------------------------------------
# Root manifest
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RootManifest:
    """Dependency summary of the top-level ``package.json``."""

    name: str | None
    dependencies: tuple[str, ...]
    """Names from every dependency section, duplicates kept, in section order."""

    @property
    def display_name(self) -> str:
        """Name of the synthetic tree node standing for the root manifest."""
        if self.name:
            return f"{self.name}{ROOT_SUFFIX}"
        return ANONYMOUS_ROOT_NAME

    @classmethod
    def empty(cls) -> RootManifest:
        return cls(name=None, dependencies=())


# ---------------------------------------------------------------------------
# Cache entries
# ---------------------------------------------------------------------------

CacheValue = Union[str, list[str], None]


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A single key/value pair written to the cache store."""

    key: str
    value: CacheValue


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _str_tuple(raw: object) -> tuple[str, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(str(item) for item in raw)


def _optional_str(raw: object) -> str | None:
    return raw if isinstance(raw, str) else None
