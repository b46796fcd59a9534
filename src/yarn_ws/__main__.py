"""Allow ``python -m yarn_ws`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m yarn_ws`` behaves identically to the ``yarn-ws``
console script.
"""

from __future__ import annotations

from yarn_ws.cli.app import cli

if __name__ == "__main__":
    cli()
