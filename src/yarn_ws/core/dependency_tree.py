"""Inverted workspace dependency tree.

Workspace ``A`` listing ``B`` in its ``workspaceDependencies`` means
"A depends on B".  The tree built here inverts that relation: ``B``'s
entry contains ``A`` as a child.  Roots are the workspaces that depend
on nothing.  The root ``package.json`` takes part as a pseudo-node that
depends on every workspace it lists and that nothing depends on.
"""

from __future__ import annotations

from yarn_ws.core.models import DependencyTree
from yarn_ws.core.protocols import ManifestSource
from yarn_ws.core.registry import WorkspaceRegistry
from yarn_ws.exceptions import CyclicDependencyError


class DependencyTreeBuilder:
    """Builds the "who depends on whom" tree from registry data.

    Parameters
    ----------
    registry:
        Source of workspace metadata.
    manifest:
        Source of the root manifest's dependency names.
    """

    def __init__(self, registry: WorkspaceRegistry, manifest: ManifestSource) -> None:
        self._registry: WorkspaceRegistry = registry
        self._manifest: ManifestSource = manifest

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_dependents(self, name: str) -> list[str]:
        """Direct dependents of *name*, root pseudo-node last."""
        workspaces = self._registry.get_workspaces() or {}
        dependents = [
            info.name
            for info in workspaces.values()
            if name in info.workspace_dependencies
        ]
        manifest = self._manifest.load()
        if name in manifest.dependencies:
            dependents.append(manifest.display_name)
        return dependents

    def get_dependencies(self, name: str) -> DependencyTree | None:
        """Subtree of everything that transitively depends on *name*.

        Returns ``None`` when nothing depends on *name*.

        Raises
        ------
        CyclicDependencyError
            When the dependency declarations loop back on *name*'s path.
        """
        return self._subtree(name, (name,))

    def get_dependency_tree(self) -> DependencyTree:
        """Full tree keyed by the root workspaces; empty without roots."""
        workspaces = self._registry.get_workspaces() or {}
        return {
            info.name: self.get_dependencies(info.name)
            for info in workspaces.values()
            if info.is_root
        }

    # ------------------------------------------------------------------
    # Recursion
    # ------------------------------------------------------------------

    def _subtree(self, name: str, path: tuple[str, ...]) -> DependencyTree | None:
        dependents = self.get_dependents(name)
        if not dependents:
            return None

        tree: DependencyTree = {}
        for dependent in dependents:
            if dependent in path:
                start = path.index(dependent)
                raise CyclicDependencyError(path[start:] + (dependent,))
            tree[dependent] = self._subtree(dependent, path + (dependent,))
        return tree
