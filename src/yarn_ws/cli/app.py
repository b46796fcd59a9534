"""CLI application entry point and command routing for yarn-ws.

This module is the **sole error boundary** for the entire application.
It catches :class:`~yarn_ws.exceptions.YarnWsError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to
  :class:`~yarn_ws.core.workspace_service.WorkspaceService`.
* Command results go to stdout (``out``); messages go to stderr
  (``console``).
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from yarn_ws.cli import exit_codes
from yarn_ws.cli.console import console, escape, out
from yarn_ws.cli.logging_setup import configure_logging, resolve_level
from yarn_ws.config import Settings
from yarn_ws.core.workspace_service import WorkspaceService
from yarn_ws.exceptions import NoWorkspaceSelectedError, UnknownWorkspaceError, YarnWsError
from yarn_ws.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser and its sub-commands."""
    parser = argparse.ArgumentParser(
        prog="yarn-ws",
        description="Inspect and drive the workspaces of a yarn monorepo.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "-C",
        "--cwd",
        default=None,
        metavar="DIR",
        help="Monorepo root (default: current directory).",
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.add_parser("info", help="Show the workspace dependency tree.")
    sub.add_parser("list", help="List discovered workspaces.")

    commands = sub.add_parser("commands", help="List a workspace's scripts.")
    commands.add_argument(
        "workspace",
        nargs="?",
        default=None,
        help="Workspace name (default: the selected workspace).",
    )

    select = sub.add_parser("select", help="Select the workspace to work in.")
    select.add_argument(
        "workspace",
        nargs="?",
        default=None,
        help="Workspace name; prompts interactively when omitted.",
    )

    sub.add_parser("current", help="Show the selected workspace.")

    run = sub.add_parser("run", help="Run a script of the selected workspace.")
    run.add_argument("script", help="Script name from the workspace's package.json.")
    run.add_argument("args", nargs=argparse.REMAINDER, help="Arguments for the script.")

    sub.add_parser("doctor", help="Run environment diagnostics.")
    return parser


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def _handle_info(service: WorkspaceService) -> int:
    from yarn_ws.cli.tree_view import show_info

    service.do_checks()
    show_info(service)
    return exit_codes.SUCCESS


def _handle_list(service: WorkspaceService) -> int:
    """Print a table of workspaces; the selected one is starred."""
    service.do_checks()
    workspaces = service.get_workspaces() or {}
    selected = service.get_selected_workspace()

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        for info in workspaces.values():
            marker = "*" if info.name == selected else " "
            deps = ", ".join(info.workspace_dependencies)
            print(f"{marker} {info.name:<30} {info.location or '':<30} {deps}")
        return exit_codes.SUCCESS

    table = Table(show_header=True, header_style="bold magenta", border_style="dim")
    table.add_column("", width=1)
    table.add_column("Workspace", style="bold")
    table.add_column("Location")
    table.add_column("Depends on")
    for info in workspaces.values():
        table.add_row(
            "[green]*[/green]" if info.name == selected else "",
            escape(info.name),
            escape(info.location or ""),
            escape(", ".join(info.workspace_dependencies)),
        )
    out.print(table)
    return exit_codes.SUCCESS


def _handle_commands(service: WorkspaceService, workspace: str | None) -> int:
    if workspace is None:
        workspace = service.get_selected_workspace()
        if workspace is None:
            raise NoWorkspaceSelectedError(
                "No workspace selected.",
                hint="Pass a workspace name, or run: yarn-ws select",
            )
    elif workspace not in service.registry.get_workspace_names():
        raise UnknownWorkspaceError(f"Cannot find workspace {workspace}!")

    commands = service.get_workspace_commands(workspace)
    if not commands:
        console.print(f"[yellow]{escape(workspace)} exposes no scripts.[/yellow]")
    for command in commands:
        out.print(escape(command))
    return exit_codes.SUCCESS


def _handle_select(service: WorkspaceService, workspace: str | None) -> int:
    service.do_checks()
    if workspace is None:
        from yarn_ws.cli.workspace_prompt import prompt_workspace_selection

        workspaces = service.get_workspaces() or {}
        workspace = prompt_workspace_selection(
            list(workspaces.values()),
            current=service.get_selected_workspace(),
        )

    commands = service.set_selected_workspace(workspace)
    console.print(f"[bold green]Selected[/bold green] {escape(workspace)}")
    for command in commands:
        out.print(escape(command))
    return exit_codes.SUCCESS


def _handle_current(service: WorkspaceService) -> int:
    workspace = service.get_selected_workspace()
    if workspace is None:
        console.print("[yellow]No workspace selected.[/yellow]")
        return exit_codes.SUCCESS
    out.print(f"[bold]{escape(workspace)}[/bold]")
    for command in service.get_selected_workspace_commands() or []:
        out.print(f"  {escape(command)}")
    return exit_codes.SUCCESS


def _handle_run(service: WorkspaceService, script: str, args: Sequence[str]) -> int:
    return service.run_workspace_command(script, args)


def _handle_doctor(settings: Settings) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from yarn_ws.cli.doctor import run_doctor

    return run_doctor(settings)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the yarn-ws CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(resolve_level(args.verbose))
    settings = Settings.from_env(cwd=args.cwd)

    if args.command == "doctor":
        return _handle_doctor(settings)

    from yarn_ws.infra import build_service

    service = build_service(settings)

    if args.command == "info":
        return _handle_info(service)
    if args.command == "list":
        return _handle_list(service)
    if args.command == "commands":
        return _handle_commands(service, args.workspace)
    if args.command == "select":
        return _handle_select(service, args.workspace)
    if args.command == "current":
        return _handle_current(service)
    return _handle_run(service, args.script, args.args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except YarnWsError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
