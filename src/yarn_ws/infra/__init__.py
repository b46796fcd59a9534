"""Infrastructure layer — external system integration.

This layer wraps all interaction with yarn, the root ``package.json``
and the on-disk cache.  Every raw exception must be caught here and
either absorbed or re-raised as a :class:`~yarn_ws.exceptions.YarnWsError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from __future__ import annotations

from yarn_ws.config import Settings
from yarn_ws.core.workspace_service import WorkspaceService
from yarn_ws.infra.cache_store import JsonFileCacheStore
from yarn_ws.infra.manifest_reader import RootManifestReader
from yarn_ws.infra.yarn_gateway import YarnGateway

__all__: list[str] = [
    "JsonFileCacheStore",
    "RootManifestReader",
    "YarnGateway",
    "build_service",
]


def build_service(settings: Settings) -> WorkspaceService:
    """Wire the concrete adapters for *settings* into a service."""
    return WorkspaceService.from_components(
        gateway=YarnGateway(settings.project_root, settings.yarn_bin),
        store=JsonFileCacheStore(settings.cache_file),
        manifest=RootManifestReader(settings.manifest_file),
    )
