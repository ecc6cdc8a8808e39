"""Local JSON files for configuration and state.

Why JSON:
- Interoperable with other tooling (jq, CI pipelines).
- Stable formatting keeps state files diff-friendly under version control.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class StateFileError(ValueError):
    """Raised when a config/state file is missing or not a JSON object."""


def load_json_object(path: Path) -> dict[str, Any]:
    """Read a UTF-8 JSON file that must contain an object."""

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise StateFileError(f"cannot read {path}: {exc}") from exc
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise StateFileError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise StateFileError(f"{path} must contain a JSON object")
    return data


def export_state_json(*, type_name: str, state: dict[str, Any], output_path: Path) -> Path:
    """Write a resource state as UTF-8 JSON with stable formatting."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"type": type_name, "attributes": state}
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path


def load_state(path: Path, type_name: str | None = None) -> dict[str, Any]:
    """Return the `attributes` of a state file written by `export_state_json`."""

    data = load_json_object(path)
    attributes = data.get("attributes")
    if not isinstance(attributes, dict):
        raise StateFileError(f"{path} has no 'attributes' object")
    if type_name is not None and data.get("type") != type_name:
        raise StateFileError(f"{path} holds a {data.get('type')!r} state, expected {type_name!r}")
    return attributes
