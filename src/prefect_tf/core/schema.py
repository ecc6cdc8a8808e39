"""Typed attribute schemas for resources and data sources.

A schema answers three questions about a configuration:
- is it valid (required attributes present, values of the right type)?
- what does the plan look like once defaults and prior state are applied?
- which attributes differ between a plan and the current state?
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from prefect_tf.core.domain.diagnostics import Diagnostics
from prefect_tf.core.helpers import normalize_json, parse_uuid


class AttrType(str, Enum):
    STRING = "string"
    BOOL = "bool"
    INT = "int"
    STRING_LIST = "list(string)"
    JSON = "json"
    UUID = "uuid"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class Attribute:
    type: AttrType
    description: str = ""
    required: bool = False
    optional: bool = False
    computed: bool = False
    default: Any = None
    use_state_for_unknown: bool = False
    # The update payload cannot carry a new value for this attribute.
    requires_replace: bool = False

    @property
    def settable(self) -> bool:
        return self.required or self.optional

    def flags(self) -> str:
        out = []
        if self.required:
            out.append("required")
        if self.optional:
            out.append("optional")
        if self.computed:
            out.append("computed")
        if self.requires_replace:
            out.append("forces replacement")
        return ", ".join(out)


def _check_type(attr: Attribute, value: Any) -> str | None:
    """Return an error message when `value` does not fit `attr`, else None."""

    kind = attr.type
    if kind in (AttrType.STRING, AttrType.TIMESTAMP):
        return None if isinstance(value, str) else "expected a string"
    if kind is AttrType.BOOL:
        return None if isinstance(value, bool) else "expected a boolean"
    if kind is AttrType.INT:
        if isinstance(value, bool) or not isinstance(value, int):
            return "expected an integer"
        return None
    if kind is AttrType.STRING_LIST:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            return "expected a list of strings"
        return None
    if kind is AttrType.JSON:
        if not isinstance(value, str):
            return "expected a JSON-encoded string"
        try:
            normalize_json(value)
        except ValueError as exc:
            return f"invalid JSON: {exc}"
        return None
    if kind is AttrType.UUID:
        if not isinstance(value, str):
            return "expected a UUID string"
        try:
            parse_uuid(value)
        except ValueError as exc:
            return f"invalid UUID: {exc}"
        return None
    return None


def _same(attr: Attribute, left: Any, right: Any) -> bool:
    if attr.type is AttrType.JSON and isinstance(left, str) and isinstance(right, str):
        try:
            return normalize_json(left) == normalize_json(right)
        except ValueError:
            return left == right
    if attr.type is AttrType.UUID and isinstance(left, str) and isinstance(right, str):
        return left.lower() == right.lower()
    if attr.type is AttrType.TIMESTAMP and isinstance(left, str) and isinstance(right, str):
        try:
            return datetime.fromisoformat(left) == datetime.fromisoformat(right)
        except ValueError:
            return left == right
    return left == right


@dataclass
class Schema:
    description: str
    attributes: dict[str, Attribute] = field(default_factory=dict)
    version: int = 0

    def validate(self, config: Mapping[str, Any]) -> Diagnostics:
        diags = Diagnostics()
        for name in config:
            attr = self.attributes.get(name)
            if attr is None:
                diags.add_attribute_error(
                    name, "Unsupported argument", f"An argument named {name!r} is not expected here."
                )
            elif not attr.settable and config[name] is not None:
                diags.add_attribute_error(
                    name,
                    "Invalid Configuration for Read-Only Attribute",
                    f"Cannot set value for {name!r}, it is computed by the provider.",
                )

        for name, attr in self.attributes.items():
            value = config.get(name)
            if value is None:
                if attr.required:
                    diags.add_attribute_error(
                        name, "Missing required argument", f"The argument {name!r} is required."
                    )
                continue
            if not attr.settable:
                continue
            problem = _check_type(attr, value)
            if problem:
                diags.add_attribute_error(name, "Incorrect attribute value type", problem)
        return diags

    def apply_defaults(self, config: Mapping[str, Any]) -> dict[str, Any]:
        out = dict(config)
        for name, attr in self.attributes.items():
            if out.get(name) is None and attr.default is not None:
                default = attr.default
                out[name] = list(default) if isinstance(default, list) else default
        return out

    def plan(self, config: Mapping[str, Any], prior_state: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Desired values: config, then static defaults, then prior state for
        computed attributes that keep their value across updates."""

        planned = self.apply_defaults(config)
        if prior_state:
            for name, attr in self.attributes.items():
                if planned.get(name) is not None:
                    continue
                if attr.use_state_for_unknown and prior_state.get(name) is not None:
                    planned[name] = prior_state[name]
        return planned

    def diff(self, planned: Mapping[str, Any], state: Mapping[str, Any]) -> list[str]:
        """Names of settable attributes whose planned value differs from state.

        Unset optional+computed attributes take whatever the server reports,
        so they never count as a change.
        """

        changed: list[str] = []
        for name, attr in self.attributes.items():
            if not attr.settable:
                continue
            want = planned.get(name)
            if want is None and attr.computed:
                continue
            if not _same(attr, want, state.get(name)):
                changed.append(name)
        return changed

    def replacements(self, changed: list[str]) -> list[str]:
        """Subset of `changed` that an in-place update cannot apply."""

        return [name for name in changed if name in self.attributes and self.attributes[name].requires_replace]
