"""Workspace service — the operations the CLI layer consumes.

This facade wires the registry, command catalog, selection manager and
dependency tree builder around injected infrastructure.  It holds no
state of its own beyond those components.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from yarn_ws.core.dependency_tree import DependencyTreeBuilder
from yarn_ws.core.models import DependencyTree, WorkspaceInfo
from yarn_ws.core.protocols import CacheStore, ManifestSource, WorkspaceGateway
from yarn_ws.core.registry import CommandCatalog, WorkspaceRegistry
from yarn_ws.core.selection import SelectionManager, no_workspaces_error
from yarn_ws.exceptions import (
    InvalidCommandError,
    NoWorkspaceSelectedError,
    ToolNotInstalledError,
)


@dataclass(frozen=True, slots=True)
class WorkspaceService:
    """Entry point for every workspace operation.

    Build it with :meth:`from_components` (tests) or
    :func:`yarn_ws.infra.build_service` (CLI).
    """

    gateway: WorkspaceGateway
    registry: WorkspaceRegistry
    catalog: CommandCatalog
    selection: SelectionManager
    tree_builder: DependencyTreeBuilder

    @classmethod
    def from_components(
        cls,
        gateway: WorkspaceGateway,
        store: CacheStore,
        manifest: ManifestSource,
    ) -> WorkspaceService:
        registry = WorkspaceRegistry(gateway)
        catalog = CommandCatalog(gateway, registry)
        return cls(
            gateway=gateway,
            registry=registry,
            catalog=catalog,
            selection=SelectionManager(registry, catalog, store),
            tree_builder=DependencyTreeBuilder(registry, manifest),
        )

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def do_checks(self) -> None:
        """Raise unless yarn runs and at least one workspace is found.

        Raises
        ------
        ToolNotInstalledError
            If the yarn version check fails.
        NoWorkspacesFoundError
            If discovery yields nothing.
        """
        if not self.gateway.is_tool_installed():
            raise ToolNotInstalledError(
                "Cannot find yarn installed!",
                hint="Install yarn (https://yarnpkg.com) or set YARN_WS_YARN_BIN.",
            )
        if not self.registry.get_workspace_names():
            raise no_workspaces_error()

    # ------------------------------------------------------------------
    # Pass-throughs
    # ------------------------------------------------------------------

    def get_workspaces(self) -> dict[str, WorkspaceInfo] | None:
        return self.registry.get_workspaces()

    def get_workspace_commands(self, workspace: str) -> list[str]:
        return self.catalog.get_workspace_commands(workspace)

    def get_selected_workspace(self) -> str | None:
        return self.selection.get_selected_workspace()

    def get_selected_workspace_commands(self) -> list[str] | None:
        return self.selection.get_selected_workspace_commands()

    def set_selected_workspace(self, name: str) -> list[str]:
        return self.selection.set_selected_workspace(name)

    def is_valid_workspace_command(self, command: str) -> bool:
        return self.selection.is_valid_workspace_command(command)

    def get_dependency_tree(self) -> DependencyTree:
        return self.tree_builder.get_dependency_tree()

    # ------------------------------------------------------------------
    # Running scripts
    # ------------------------------------------------------------------

    def run_workspace_command(self, command: str, args: Sequence[str] = ()) -> int:
        """Run *command* in the selected workspace and return its exit code.

        Raises
        ------
        NoWorkspaceSelectedError
            If no workspace has been selected yet.
        InvalidCommandError
            If *command* is not in the selected workspace's catalog.
        """
        workspace = self.get_selected_workspace()
        if workspace is None:
            raise NoWorkspaceSelectedError(
                "No workspace selected.",
                hint="Select one first: yarn-ws select <workspace>",
            )
        if not self.is_valid_workspace_command(command):
            commands = self.get_selected_workspace_commands() or []
            raise InvalidCommandError(
                f"Command {command!r} is not available in workspace {workspace}.",
                hint=(
                    f"Available: {', '.join(commands)}"
                    if commands
                    else "The selected workspace exposes no scripts."
                ),
            )
        return self.gateway.run_command(workspace, command, args)
