"""Parsers for yarn's machine-readable output.

Two output shapes of ``yarn workspaces info --json`` are recognised:

* **enveloped** — a single JSON object whose ``data`` field holds the
  workspace map, usually as a JSON-encoded string (yarn 1.x).
* **banner-stripped** — the workspace map printed as plain JSON between
  a first and a last line of human-oriented text.

The variant is chosen by sniffing the output before any fallback.
Every function here is pure; callers own logging.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from yarn_ws.exceptions import DiscoveryFailedError


class OutputShape(Enum):
    ENVELOPED = "enveloped"
    BANNER_STRIPPED = "banner-stripped"


def load_json(text: str) -> Any | None:
    """Decode *text* as JSON, returning ``None`` instead of raising."""
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        return None


def detect_shape(output: str) -> OutputShape:
    """Decide which variant *output* is.

    Only a JSON object carrying a non-empty ``data`` member counts as an
    envelope; anything else is treated as banner-wrapped.
    """
    stripped = output.strip()
    if stripped.startswith("{"):
        parsed = load_json(stripped)
        if isinstance(parsed, dict) and parsed.get("data"):
            return OutputShape.ENVELOPED
    return OutputShape.BANNER_STRIPPED


def parse_workspaces_output(output: str) -> dict[str, dict[str, Any]]:
    """Turn raw ``workspaces info`` output into the workspace map.

    Raises
    ------
    DiscoveryFailedError
        When neither variant yields a JSON object.
    """
    stripped = output.strip()
    if not stripped:
        raise DiscoveryFailedError("yarn returned no workspace information.")

    shape = detect_shape(stripped)
    if shape is OutputShape.ENVELOPED:
        data = json.loads(stripped)["data"]
        body = load_json(data) if isinstance(data, str) else data
    else:
        body = load_json(_strip_banner(stripped))

    if not isinstance(body, dict):
        raise DiscoveryFailedError(
            f"Cannot parse workspace information ({shape.value} output).",
            hint="Check that the project root declares `workspaces` in package.json.",
        )
    return {
        str(name): record if isinstance(record, dict) else {}
        for name, record in body.items()
    }


def parse_possible_commands(output: str) -> list[str]:
    """Extract script names from newline-delimited ``run --json`` output.

    The first record of ``type == "list"`` whose ``data.type`` is
    ``"possibleCommands"`` wins.  Undecodable lines are skipped; no
    match yields an empty list.
    """
    for line in output.splitlines():
        record = load_json(line)
        if not isinstance(record, dict) or record.get("type") != "list":
            continue
        data = record.get("data")
        if isinstance(data, dict) and data.get("type") == "possibleCommands":
            items = data.get("items")
            if isinstance(items, list):
                return [str(item) for item in items]
    return []


def _strip_banner(output: str) -> str:
    """Drop the first and the last line of *output*."""
    first_break = output.find("\n")
    last_break = output.rfind("\n")
    if first_break < 0 or first_break == last_break:
        return ""
    return output[first_break + 1:last_break]
