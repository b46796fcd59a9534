"""Shared pytest fixtures and configuration for the yarn-ws test suite.

Guidelines
----------
* No real yarn invocation in any test.
* ``subprocess`` must be mocked at the infra boundary.
* Core tests use in-memory fakes for the gateway, cache and manifest.
* Tests must not depend on OS state; files go under ``tmp_path``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any
from unittest.mock import MagicMock

import pytest

from yarn_ws.core.models import CacheEntry, CacheValue, RootManifest
from yarn_ws.core.workspace_service import WorkspaceService


class MemoryCacheStore:
    """In-memory :class:`CacheStore` recording every ``save`` call."""

    def __init__(self, initial: dict[str, CacheValue] | None = None) -> None:
        self.data: dict[str, CacheValue] = dict(initial or {})
        self.saves: list[list[CacheEntry]] = []

    def get(self, key: str) -> CacheValue:
        return self.data.get(key)

    def save(self, entries: Sequence[CacheEntry]) -> None:
        self.saves.append(list(entries))
        for entry in entries:
            self.data[entry.key] = entry.value


class StaticManifest:
    """:class:`ManifestSource` returning a fixed manifest."""

    def __init__(self, name: str | None = None, dependencies: Sequence[str] = ()) -> None:
        self.manifest = RootManifest(name=name, dependencies=tuple(dependencies))

    def load(self) -> RootManifest:
        return self.manifest

    def get_root_package_dependencies(self) -> list[str]:
        return list(self.manifest.dependencies)


def fake_gateway(
    workspaces: dict[str, dict[str, Any]] | Exception | None = None,
    commands: dict[str, list[str]] | None = None,
    *,
    installed: bool = True,
) -> MagicMock:
    """Return a mock WorkspaceGateway.

    If *workspaces* is an exception, ``list_workspaces`` raises it.
    """
    gateway = MagicMock()
    gateway.is_tool_installed.return_value = installed
    if isinstance(workspaces, Exception):
        gateway.list_workspaces.side_effect = workspaces
    else:
        gateway.list_workspaces.return_value = workspaces or {}
    gateway.list_commands.side_effect = lambda name: list((commands or {}).get(name, []))
    gateway.run_command.return_value = 0
    return gateway


@pytest.fixture
def store() -> MemoryCacheStore:
    return MemoryCacheStore()


@pytest.fixture
def sample_workspaces() -> dict[str, dict[str, Any]]:
    """``utils`` ← ``core`` ← ``web``, plus an independent ``docs``."""
    return {
        "utils": {"location": "packages/utils", "workspaceDependencies": []},
        "core": {"location": "packages/core", "workspaceDependencies": ["utils"]},
        "web": {"location": "apps/web", "workspaceDependencies": ["core", "utils"]},
        "docs": {"location": "apps/docs"},
    }


@pytest.fixture
def sample_commands() -> dict[str, list[str]]:
    return {
        "utils": ["build", "test"],
        "core": ["build", "lint", "test"],
        "web": ["dev", "build"],
    }


@pytest.fixture
def service(
    sample_workspaces: dict[str, dict[str, Any]],
    sample_commands: dict[str, list[str]],
    store: MemoryCacheStore,
) -> WorkspaceService:
    return WorkspaceService.from_components(
        gateway=fake_gateway(sample_workspaces, sample_commands),
        store=store,
        manifest=StaticManifest("monorepo", ["web"]),
    )
