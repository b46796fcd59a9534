"""Rendering of the inverted dependency tree (``yarn-ws info``).

Rich's :class:`~rich.tree.Tree` is used when available; otherwise a
plain box-drawing rendition is printed.  Output goes to stdout.
"""

from __future__ import annotations

from typing import Any

from yarn_ws.cli.console import escape, out
from yarn_ws.core.models import ROOT_SUFFIX, DependencyTree
from yarn_ws.core.workspace_service import WorkspaceService


def _label(name: str) -> str:
    if name.endswith(ROOT_SUFFIX):
        return f"[bold magenta]{escape(name)}[/bold magenta]"
    return f"[cyan]{escape(name)}[/cyan]"


def build_rich_tree(tree: DependencyTree) -> Any:
    """Convert *tree* into a ``rich.tree.Tree`` with a hidden root."""
    from rich.tree import Tree

    rich_tree = Tree("[bold]workspaces[/bold]", hide_root=True, guide_style="dim")

    def add_children(parent: Any, subtree: DependencyTree | None) -> None:
        for name, children in (subtree or {}).items():
            add_children(parent.add(_label(name)), children)

    add_children(rich_tree, tree)
    return rich_tree


def format_plain_tree(tree: DependencyTree) -> str:
    """Box-drawing rendition of *tree*, one node per line."""
    lines: list[str] = []

    def walk(subtree: DependencyTree, prefix: str) -> None:
        items = list(subtree.items())
        for index, (name, children) in enumerate(items):
            last = index == len(items) - 1
            lines.append(f"{prefix}{'└─ ' if last else '├─ '}{name}")
            if children:
                walk(children, prefix + ("   " if last else "│  "))

    walk(tree, "")
    return "\n".join(lines)


def render_dependency_tree(tree: DependencyTree) -> None:
    """Print *tree*; prints nothing for an empty tree."""
    if not tree:
        return
    try:
        rich_tree = build_rich_tree(tree)
    except ModuleNotFoundError:
        out.print(format_plain_tree(tree))
        return
    out.print(rich_tree)


def show_info(service: WorkspaceService) -> None:
    """Print the dependency tree of every discovered workspace."""
    render_dependency_tree(service.get_dependency_tree())
