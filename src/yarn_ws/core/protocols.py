"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from yarn_ws.core.models import CacheEntry, CacheValue, RootManifest


class WorkspaceGateway(Protocol):
    """Contract for the process that knows about the monorepo's workspaces."""

    def is_tool_installed(self) -> bool:
        """Return ``True`` when the package manager answers a version check.

        Must never raise.
        """
        ...  # pragma: no cover

    def list_workspaces(self) -> dict[str, dict[str, Any]]:
        """Return the raw per-workspace records keyed by workspace name.

        Raises
        ------
        DiscoveryFailedError
            When the listing cannot be executed or its output parsed.
        """
        ...  # pragma: no cover

    def list_commands(self, workspace: str) -> list[str]:
        """Return the runnable script names of *workspace*.

        Must never raise; any failure yields an empty list.
        """
        ...  # pragma: no cover

    def run_command(self, workspace: str, command: str, args: Sequence[str] = ()) -> int:
        """Run *command* inside *workspace* with inherited stdio.

        Returns the process exit code.
        """
        ...  # pragma: no cover


class CacheStore(Protocol):
    """Contract for the persistent key-value store."""

    def get(self, key: str) -> CacheValue:
        """Return the value stored under *key*, or ``None`` when absent."""
        ...  # pragma: no cover

    def save(self, entries: Sequence[CacheEntry]) -> None:
        """Persist all *entries* together.

        Raises
        ------
        CacheStoreError
            When the store cannot be written.
        """
        ...  # pragma: no cover


class ManifestSource(Protocol):
    """Contract for the root project manifest reader."""

    def load(self) -> RootManifest:
        """Return the memoized root manifest summary.

        Read failures degrade to :meth:`RootManifest.empty` and are never
        raised to the caller.
        """
        ...  # pragma: no cover

    def get_root_package_dependencies(self) -> list[str]:
        ...  # pragma: no cover
