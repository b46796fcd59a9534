"""Workspace Registry and Command Catalog.

Both components memoize what they learn from the gateway for the
lifetime of the instance.  A single instance of each is created per
process and shared by reference, so "per instance" and "per process"
coincide in the CLI.
"""

from __future__ import annotations

import logging

from yarn_ws.core.models import WorkspaceInfo
from yarn_ws.core.protocols import WorkspaceGateway
from yarn_ws.exceptions import YarnWsError

logger = logging.getLogger(__name__)


class WorkspaceRegistry:
    """Discovers the monorepo's workspaces once and remembers them.

    Parameters
    ----------
    gateway:
        Any object satisfying the :class:`WorkspaceGateway` protocol.
    """

    def __init__(self, gateway: WorkspaceGateway) -> None:
        self._gateway: WorkspaceGateway = gateway
        self._workspaces: dict[str, WorkspaceInfo] | None = None

    def get_workspaces(self) -> dict[str, WorkspaceInfo] | None:
        """Return the workspace map, or ``None`` if discovery failed.

        A successful result is cached and returned by identity on every
        later call; it is never re-fetched.  Failures are logged and not
        cached.
        """
        if self._workspaces is not None:
            return self._workspaces

        try:
            raw = self._gateway.list_workspaces()
        except YarnWsError as exc:
            logger.error("Cannot find yarn workspaces: %s", exc)
            return None
        except Exception:
            logger.exception("Cannot find yarn workspaces")
            return None

        self._workspaces = {
            name: WorkspaceInfo.from_record(name, record)
            for name, record in raw.items()
        }
        logger.debug("Discovered %d workspace(s)", len(self._workspaces))
        return self._workspaces

    def get_workspace_names(self) -> list[str]:
        """Names of every discovered workspace, in yarn's order."""
        return list(self.get_workspaces() or {})


class CommandCatalog:
    """Per-workspace memo of runnable script names.

    Only non-empty catalogs are remembered; an empty answer is fetched
    again on the next call.  :meth:`forget` drops remembered catalogs.
    """

    def __init__(self, gateway: WorkspaceGateway, registry: WorkspaceRegistry) -> None:
        self._gateway: WorkspaceGateway = gateway
        self._registry: WorkspaceRegistry = registry
        self._commands: dict[str, list[str]] = {}

    def get_workspace_commands(self, workspace: str) -> list[str]:
        """Return the scripts *workspace* exposes, or ``[]``.

        Unknown workspaces short-circuit to ``[]`` without invoking the
        gateway.
        """
        cached = self._commands.get(workspace)
        if cached:
            return list(cached)

        if workspace not in self._registry.get_workspace_names():
            logger.debug("Skipping command lookup for unknown workspace %r", workspace)
            return []

        commands = self._gateway.list_commands(workspace)
        if commands:
            self._commands[workspace] = list(commands)
        else:
            logger.debug("No commands found for workspace %r", workspace)
        return commands

    def forget(self, workspace: str | None = None) -> None:
        """Drop the remembered catalog for *workspace*, or all of them."""
        if workspace is None:
            self._commands.clear()
        else:
            self._commands.pop(workspace, None)
