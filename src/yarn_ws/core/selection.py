"""Selection Manager — persists the chosen workspace and its scripts."""

from __future__ import annotations

import logging

from yarn_ws.core.models import (
    SELECTED_COMMANDS_KEY,
    SELECTED_WORKSPACE_KEY,
    CacheEntry,
)
from yarn_ws.core.protocols import CacheStore
from yarn_ws.core.registry import CommandCatalog, WorkspaceRegistry
from yarn_ws.exceptions import NoWorkspacesFoundError, UnknownWorkspaceError

logger = logging.getLogger(__name__)


def no_workspaces_error() -> NoWorkspacesFoundError:
    return NoWorkspacesFoundError(
        "Cannot find yarn workspaces!",
        hint="Run from the monorepo root, or pass --cwd pointing at it.",
    )


class SelectionManager:
    """Reads and writes the selected workspace in the cache store."""

    def __init__(
        self,
        registry: WorkspaceRegistry,
        catalog: CommandCatalog,
        store: CacheStore,
    ) -> None:
        self._registry: WorkspaceRegistry = registry
        self._catalog: CommandCatalog = catalog
        self._store: CacheStore = store

    def set_selected_workspace(self, name: str) -> list[str]:
        """Select *name* and persist it together with its command catalog.

        Both keys are written by a single :meth:`CacheStore.save` call;
        nothing is written when validation fails.

        Raises
        ------
        NoWorkspacesFoundError
            If discovery yields no workspaces.
        UnknownWorkspaceError
            If *name* is not a discovered workspace.
        """
        names = self._registry.get_workspace_names()
        if not names:
            raise no_workspaces_error()
        if name not in names:
            raise UnknownWorkspaceError(
                f"Cannot find selected workspace {name}!",
                hint=f"Known workspaces: {', '.join(names)}",
            )

        commands = self._catalog.get_workspace_commands(name)
        self._store.save(
            [
                CacheEntry(key=SELECTED_WORKSPACE_KEY, value=name),
                CacheEntry(key=SELECTED_COMMANDS_KEY, value=commands),
            ]
        )
        logger.info("Selected workspace %s (%d command(s))", name, len(commands))
        return commands

    def get_selected_workspace(self) -> str | None:
        value = self._store.get(SELECTED_WORKSPACE_KEY)
        return value if isinstance(value, str) else None

    def get_selected_workspace_commands(self) -> list[str] | None:
        value = self._store.get(SELECTED_COMMANDS_KEY)
        return list(value) if isinstance(value, list) else None

    def is_valid_workspace_command(self, command: str) -> bool:
        """Whether *command* is in the persisted catalog (absent → empty)."""
        commands = self.get_selected_workspace_commands() or []
        return command in commands
