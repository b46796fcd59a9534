"""Interactive workspace selection for ``yarn-ws select``.

Renders the discovered workspaces as a questionary arrow-key list and
returns the chosen name.  No business logic lives here.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from yarn_ws.core.models import WorkspaceInfo
from yarn_ws.exceptions import EnvironmentError, UnknownWorkspaceError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _build_choice_label(info: WorkspaceInfo) -> str:
    """Format: ``"web-app   packages/web-app"``"""
    location = info.location or ""
    return f"{info.name:<30} {location}"


def prompt_workspace_selection(
    workspaces: Sequence[WorkspaceInfo],
    current: str | None = None,
) -> str:
    """Prompt the user to pick one of *workspaces*.

    Raises
    ------
    UnknownWorkspaceError
        If the user cancels the prompt (Esc / Ctrl+C).
    """
    questionary = _import_questionary()

    choices = [
        questionary.Choice(title=_build_choice_label(info), value=info.name)
        for info in workspaces
    ]
    default = current if current in {info.name for info in workspaces} else None

    selected: str | None = questionary.select(
        "Select workspace:",
        choices=choices,
        default=default,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()  # Returns None on Ctrl+C / Esc

    if selected is None:
        raise UnknownWorkspaceError(
            "No workspace selected.",
            hint="Use arrow keys to pick a workspace, then press Enter.",
        )
    return selected
