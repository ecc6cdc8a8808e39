"""Lifecycle pipelines over raw config/state mappings.

This module consolidates the plan -> operation -> state flow so the CLI only
deals with files and rendering. Every pipeline returns a `LifecycleResult`;
on error the returned `state` is the last known good one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from prefect_tf.core.domain.diagnostics import Diagnostics
from prefect_tf.core.resources.base import DataSource, Resource, load_model

logger = logging.getLogger(__name__)


class Action(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    NOOP = "no-op"
    READ = "read"
    DELETE = "delete"
    IMPORT = "import"


@dataclass
class LifecycleResult:
    action: Action
    state: dict[str, Any] | None = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    changed: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics.has_error()


def apply(
    resource: Resource,
    config: Mapping[str, Any],
    prior_state: Mapping[str, Any] | None = None,
) -> LifecycleResult:
    """Create the resource, or update it when a prior state exists and differs."""

    action = Action.UPDATE if prior_state else Action.CREATE
    out = LifecycleResult(action=action, state=dict(prior_state) if prior_state else None)

    schema = resource.schema()
    out.diagnostics.extend(schema.validate(config))
    if out.diagnostics.has_error():
        return out

    planned = schema.plan(config, prior_state)

    prior_model = None
    if prior_state:
        out.changed = schema.diff(planned, prior_state)
        if not out.changed:
            out.action = Action.NOOP
            return out
        for name in schema.replacements(out.changed):
            out.diagnostics.add_attribute_error(
                name,
                "Attribute requires replacement",
                f"{name!r} cannot be changed in place. Destroy the resource and apply the new configuration.",
            )
        if out.diagnostics.has_error():
            return out
        prior_model, diags = load_model(resource.model, prior_state)
        out.diagnostics.extend(diags)

    plan_model, diags = load_model(resource.model, planned)
    out.diagnostics.extend(diags)
    if out.diagnostics.has_error() or plan_model is None:
        return out

    logger.info("Planned %s with changes: %s", action.value, ", ".join(out.changed) or "all")
    if prior_model is None:
        result = resource.create(plan_model)
    else:
        result = resource.update(plan_model, prior_model)

    out.diagnostics.extend(result.diagnostics)
    if result.state is not None and not result.diagnostics.has_error():
        out.state = result.state.to_state()
    return out


def refresh(resource: Resource, state: Mapping[str, Any]) -> LifecycleResult:
    out = LifecycleResult(action=Action.READ, state=dict(state))
    model, diags = load_model(resource.model, state)
    out.diagnostics.extend(diags)
    if model is None:
        return out

    result = resource.read(model)
    out.diagnostics.extend(result.diagnostics)
    if result.state is not None and not result.diagnostics.has_error():
        out.state = result.state.to_state()
    return out


def destroy(resource: Resource, state: Mapping[str, Any]) -> LifecycleResult:
    out = LifecycleResult(action=Action.DELETE, state=dict(state))
    model, diags = load_model(resource.model, state)
    out.diagnostics.extend(diags)
    if model is None:
        return out

    result = resource.delete(model)
    out.diagnostics.extend(result.diagnostics)
    if not result.diagnostics.has_error():
        out.state = None
    return out


def import_resource(resource: Resource, identifier: str) -> LifecycleResult:
    """ImportState followed by a Read, as `terraform import` does."""

    out = LifecycleResult(action=Action.IMPORT)
    imported = resource.import_state(identifier)
    out.diagnostics.extend(imported.diagnostics)
    if imported.state is None or imported.diagnostics.has_error():
        return out

    result = resource.read(imported.state)
    out.diagnostics.extend(result.diagnostics)
    if result.state is not None and not result.diagnostics.has_error():
        out.state = result.state.to_state()
    return out


def read_data_source(data_source: DataSource, config: Mapping[str, Any]) -> LifecycleResult:
    out = LifecycleResult(action=Action.READ)
    schema = data_source.schema()
    out.diagnostics.extend(schema.validate(config))
    if out.diagnostics.has_error():
        return out

    model, diags = load_model(data_source.model, config)
    out.diagnostics.extend(diags)
    if model is None:
        return out

    result = data_source.read(model)
    out.diagnostics.extend(result.diagnostics)
    if result.state is not None and not result.diagnostics.has_error():
        out.state = result.state.to_state()
    return out
