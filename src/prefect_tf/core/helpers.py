"""Small helpers shared by resources and data sources."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from prefect_tf.core.domain.diagnostics import Diagnostic, Diagnostics, Severity

IMPORT_ID_FORMAT = "`id,workspace_id`"
MAX_IMPORT_PARTS = 2


def parse_uuid(value: str) -> UUID:
    """Parse a UUID string, raising `ValueError` on malformed input."""

    return UUID(str(value).strip())


def normalize_json(value: str) -> Any:
    """Decode a JSON string into a value that compares semantically.

    Two strings with different whitespace or key order normalise to equal
    values. Raises `ValueError` for invalid JSON.
    """

    return json.loads(value)


def dump_json(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"))


def create_client_error_diagnostic(resource_name: str, exc: Exception) -> Diagnostic:
    return Diagnostic(
        Severity.ERROR,
        f"Error creating {resource_name} client",
        f"Could not create {resource_name} client, unexpected error: {exc}. "
        "This is a bug in the provider, please report this to the maintainers.",
    )


def parse_uuid_error_diagnostic(resource_name: str, exc: Exception) -> Diagnostic:
    return Diagnostic(
        Severity.ERROR,
        f"Error parsing {resource_name} ID",
        f"Could not parse {resource_name} ID to UUID, unexpected error: {exc}",
    )


def serialize_data_error_diagnostic(attribute: str, resource_name: str, exc: Exception) -> Diagnostic:
    return Diagnostic(
        Severity.ERROR,
        "Failed to serialize data",
        f"Could not serialize {resource_name}, unexpected error: {exc}",
        attribute,
    )


@dataclass(frozen=True)
class ImportIdentifier:
    identifier: str
    workspace_id: UUID | None = None


def parse_import_identifier(
    raw: str, resource_name: str, diags: Diagnostics
) -> ImportIdentifier | None:
    """Split an import string of the form `id` or `id,workspace_id`.

    Errors are appended to `diags`; `None` is returned in that case.
    """

    parts = raw.split(",")

    # eg. "foo,bar,baz"
    if len(parts) > MAX_IMPORT_PARTS:
        diags.add_error(
            "Unexpected Import Identifier",
            f"Expected a maximum of {MAX_IMPORT_PARTS} import identifiers, "
            f"in the form of {IMPORT_ID_FORMAT}. Got {json.dumps(raw)}",
        )
        return None

    # eg. ",foo" or "foo,"
    if len(parts) == MAX_IMPORT_PARTS and (parts[0] == "" or parts[1] == ""):
        diags.add_error(
            "Unexpected Import Identifier",
            f"Expected non-empty import identifiers, in the form of {IMPORT_ID_FORMAT}. Got {json.dumps(raw)}",
        )
        return None

    if parts[0] == "":
        diags.add_error(
            "Unexpected Import Identifier",
            f"Expected a non-empty import identifier, in the form of {IMPORT_ID_FORMAT}. Got {json.dumps(raw)}",
        )
        return None

    workspace_id = None
    if len(parts) == MAX_IMPORT_PARTS:
        try:
            workspace_id = parse_uuid(parts[1])
        except ValueError as exc:
            diags.append(parse_uuid_error_diagnostic(resource_name, exc))
            return None

    return ImportIdentifier(identifier=parts[0], workspace_id=workspace_id)
