"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem, subprocess or network I/O.
* No imports from ``cli`` or ``infra``.
* Logging through :mod:`logging` only.
"""

from yarn_ws.core.dependency_tree import DependencyTreeBuilder
from yarn_ws.core.models import CacheEntry, DependencyTree, RootManifest, WorkspaceInfo
from yarn_ws.core.protocols import CacheStore, ManifestSource, WorkspaceGateway
from yarn_ws.core.registry import CommandCatalog, WorkspaceRegistry
from yarn_ws.core.selection import SelectionManager
from yarn_ws.core.workspace_service import WorkspaceService

__all__: list[str] = [
    "CacheEntry",
    "CacheStore",
    "CommandCatalog",
    "DependencyTree",
    "DependencyTreeBuilder",
    "ManifestSource",
    "RootManifest",
    "SelectionManager",
    "WorkspaceGateway",
    "WorkspaceInfo",
    "WorkspaceRegistry",
    "WorkspaceService",
]
