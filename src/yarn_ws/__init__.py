"""yarn-ws — inspect and drive the workspaces of a yarn monorepo.

Discovers declared workspaces, remembers a selected workspace with its
runnable scripts, and renders the inverted workspace dependency tree.
"""

from yarn_ws.version import __version__

__all__: list[str] = ["__version__"]
