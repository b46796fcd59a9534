"""yarn-backed implementation of :class:`~yarn_ws.core.protocols.WorkspaceGateway`.

This module is the **only** place in the codebase that starts yarn
processes.  ``subprocess`` and ``OSError`` failures are caught here and
either absorbed (per the protocol) or re-raised as typed
:class:`~yarn_ws.exceptions.YarnWsError` subclasses — nothing raw
escapes the infrastructure boundary.

Rules
-----
* Executable lookup via :func:`shutil.which`, falling back to the bare
  name so that the OS reports a missing binary.
* No timeouts: a hung yarn process hangs the calling command.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from yarn_ws.core.output_parser import parse_possible_commands, parse_workspaces_output
from yarn_ws.exceptions import DiscoveryFailedError, ToolNotInstalledError

logger = logging.getLogger(__name__)


class YarnGateway:
    """Concrete :class:`WorkspaceGateway` that shells out to yarn.

    Usage::

        gateway = YarnGateway(Path("/path/to/monorepo"))
        if gateway.is_tool_installed():
            workspaces = gateway.list_workspaces()

    This class satisfies the protocol structurally — no explicit
    inheritance required.
    """

    def __init__(self, project_root: Path, yarn_bin: str = "yarn") -> None:
        self._project_root: Path = project_root
        self._yarn_bin: str = yarn_bin

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def version(self) -> str | None:
        """Return yarn's version string, or ``None`` if yarn cannot run.

        A successful run with empty output yields ``""``.
        """
        try:
            return self._capture("--version").strip()
        except (OSError, ValueError, subprocess.CalledProcessError) as exc:
            logger.debug("yarn version check failed: %s", exc)
            return None

    def is_tool_installed(self) -> bool:
        return self.version() is not None

    def list_workspaces(self) -> dict[str, dict[str, Any]]:
        """Run ``yarn workspaces info --json`` and parse its output.

        Raises
        ------
        DiscoveryFailedError
            When yarn fails or prints something unparseable.
        """
        try:
            output = self._capture("workspaces", "info", "--json")
        except (OSError, ValueError) as exc:
            raise DiscoveryFailedError(
                f"Cannot run {self._yarn_bin}: {exc}",
                hint="Is yarn installed and on PATH?",
            ) from exc
        except subprocess.CalledProcessError as exc:
            raise DiscoveryFailedError(
                f"yarn workspaces info exited with status {exc.returncode}",
                hint=(exc.stderr or "").strip() or None,
            ) from exc
        return parse_workspaces_output(output)

    def list_commands(self, workspace: str) -> list[str]:
        """Run ``yarn workspace <name> run --json`` and extract script names."""
        try:
            output = self._capture("workspace", workspace, "run", "--json")
        except (OSError, ValueError, subprocess.CalledProcessError) as exc:
            logger.debug("Listing commands of %s failed: %s", workspace, exc)
            return []
        return parse_possible_commands(output)

    def run_command(self, workspace: str, command: str, args: Sequence[str] = ()) -> int:
        """Run a workspace script, streaming its output to this terminal.

        Raises
        ------
        ToolNotInstalledError
            When the yarn executable cannot be started.
        """
        argv = [self._executable(), "workspace", workspace, "run", command, *args]
        logger.debug("Running %s", argv)
        try:
            completed = subprocess.run(argv, cwd=self._project_root, check=False)
        except OSError as exc:
            raise ToolNotInstalledError(
                f"Cannot run {self._yarn_bin}: {exc}",
            ) from exc
        return completed.returncode

    # ------------------------------------------------------------------
    # Process helpers
    # ------------------------------------------------------------------

    def _executable(self) -> str:
        return shutil.which(self._yarn_bin) or self._yarn_bin

    def _capture(self, *args: str) -> str:
        """Run yarn with *args* and return its stdout.

        Undecodable bytes are replaced.  Raises ``OSError`` /
        ``CalledProcessError`` for the caller to map.
        """
        argv = [self._executable(), *args]
        logger.debug("Running %s", argv)
        completed = subprocess.run(
            argv,
            cwd=self._project_root,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True,
        )
        return completed.stdout
