"""``yarn-ws doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the current directory is a yarn monorepo yarn-ws can work with.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.
"""

from __future__ import annotations

import platform
import sys

from yarn_ws.cli import exit_codes
from yarn_ws.cli.console import console, escape
from yarn_ws.config import Settings
from yarn_ws.core.registry import WorkspaceRegistry
from yarn_ws.exceptions import ManifestUnreadableError
from yarn_ws.infra.manifest_reader import read_manifest
from yarn_ws.infra.yarn_gateway import YarnGateway
from yarn_ws.version import __version__

Check = tuple[str, str, str]

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _yarn_ws_version_check() -> Check:
    return "yarn-ws", __version__, OK


def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _yarn_check(gateway: YarnGateway) -> Check:
    version = gateway.version()
    if version is None:
        return "yarn", "NOT INSTALLED", FAIL
    return "yarn", version or "unknown", OK


def _manifest_check(settings: Settings) -> Check:
    try:
        manifest = read_manifest(settings.manifest_file)
    except ManifestUnreadableError:
        return "package.json", "not readable", WARN
    return "package.json", manifest.display_name, OK


def _workspaces_check(registry: WorkspaceRegistry) -> Check:
    names = registry.get_workspace_names()
    if not names:
        return "workspaces", "none found", FAIL
    return "workspaces", str(len(names)), OK


def _os_check() -> Check:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {"Darwin": "macOS"}.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[Check]) -> None:
    """Render doctor output without Rich."""
    print("\nyarn-ws doctor", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"{'Component':<14} {'Value':<34} {'Status':<8}", file=sys.stderr)
    print("-" * 60, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<14} {value:<34} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def collect_checks(settings: Settings) -> list[Check]:
    gateway = YarnGateway(settings.project_root, settings.yarn_bin)
    yarn = _yarn_check(gateway)
    checks = [
        _yarn_ws_version_check(),
        _python_version_check(),
        yarn,
        _manifest_check(settings),
    ]
    # Workspace discovery needs a working yarn.
    if yarn[2] != FAIL:
        checks.append(_workspaces_check(WorkspaceRegistry(gateway)))
    checks.append(_os_check())
    return checks


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(settings: Settings) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    checks = collect_checks(settings)
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        print(
            "Some checks failed." if has_failure else "All checks passed.",
            file=sys.stderr,
        )
        return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS

    table = Table(
        title="yarn-ws doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=14)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, escape(value), status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR
    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
