"""Custom exception hierarchy for yarn-ws.

All exceptions that cross layer boundaries must inherit from
:class:`YarnWsError`.  Raw exceptions from ``subprocess``, the file
system or the JSON decoder must NEVER propagate beyond the
infrastructure layer — they are caught there and re-raised as a typed
subclass defined here.

Hierarchy
---------
YarnWsError
├── ToolNotInstalledError
├── DiscoveryFailedError
├── NoWorkspacesFoundError
├── UnknownWorkspaceError
├── NoWorkspaceSelectedError
├── InvalidCommandError
├── CyclicDependencyError
├── ManifestUnreadableError
├── CacheStoreError
└── EnvironmentError
"""

from __future__ import annotations


class YarnWsError(Exception):
    """Base exception for all yarn-ws errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Tooling ---------------------------------------------------------------

class ToolNotInstalledError(YarnWsError):
    """Raised when the yarn executable cannot be run."""


class DiscoveryFailedError(YarnWsError):
    """Raised when workspace listing fails to execute or to parse."""


# --- Workspaces ------------------------------------------------------------

class NoWorkspacesFoundError(YarnWsError):
    """Raised when discovery yields no workspaces at all."""


class UnknownWorkspaceError(YarnWsError):
    """Raised when a workspace name is not among the discovered ones."""


class NoWorkspaceSelectedError(YarnWsError):
    """Raised when an operation needs a selected workspace and none is cached."""


class InvalidCommandError(YarnWsError):
    """Raised when a command is not in the selected workspace's catalog."""


class CyclicDependencyError(YarnWsError):
    """Raised when workspace dependencies form a cycle."""

    def __init__(self, cycle: tuple[str, ...]) -> None:
        super().__init__(
            f"Cyclic workspace dependency: {' -> '.join(cycle)}",
            hint="Remove one of the workspace dependencies listed above.",
        )
        self.cycle: tuple[str, ...] = cycle


# --- Files -----------------------------------------------------------------

class ManifestUnreadableError(YarnWsError):
    """Raised when the root ``package.json`` cannot be read or parsed."""


class CacheStoreError(YarnWsError):
    """Raised when the on-disk key-value cache cannot be read or written."""


# --- Environment -----------------------------------------------------------

class EnvironmentError(YarnWsError):
    """Raised when an optional runtime dependency is not available."""
