"""Resource: `prefect_work_pool`.

Work pools are addressed by name in the API, so the name (not the ID) is the
identity used for Read/Update/Delete and for import.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, ClassVar
from uuid import UUID

from prefect_tf.core.domain.diagnostics import Diagnostics
from prefect_tf.core.domain.models import WorkPool, WorkPoolCreate, WorkPoolUpdate
from prefect_tf.core.errors import PrefectAPIError
from prefect_tf.core.helpers import dump_json, parse_import_identifier, serialize_data_error_diagnostic
from prefect_tf.core.resources.base import OperationResult, Resource, StateModel, load_model
from prefect_tf.core.schema import Attribute, AttrType, Schema

logger = logging.getLogger(__name__)


class WorkPoolResourceModel(StateModel):
    id: str | None = None
    created: datetime | None = None
    updated: datetime | None = None
    account_id: UUID | None = None
    workspace_id: UUID | None = None
    name: str | None = None
    description: str | None = None
    type: str | None = None
    paused: bool | None = None
    concurrency_limit: int | None = None
    default_queue_id: str | None = None
    base_job_template: str | None = None


def copy_work_pool_to_model(pool: WorkPool, model: WorkPoolResourceModel) -> Diagnostics:
    diags = Diagnostics()
    model.id = str(pool.id)
    model.created = pool.created
    model.updated = pool.updated
    model.name = pool.name
    model.description = pool.description
    model.type = pool.type
    model.paused = pool.paused
    model.concurrency_limit = pool.concurrency_limit
    model.default_queue_id = str(pool.default_queue_id) if pool.default_queue_id else None
    try:
        model.base_job_template = dump_json(pool.base_job_template)
    except (TypeError, ValueError) as exc:
        diags.append(serialize_data_error_diagnostic("base_job_template", "Work pool base job template", exc))
    return diags


def _decode_template(raw: str | None, diags: Diagnostics) -> dict[str, Any] | None:
    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except ValueError as exc:
        diags.add_attribute_error(
            "base_job_template", "Normalized JSON Unmarshal Error", f"Could not decode base_job_template: {exc}"
        )
        return None
    if data is None:
        return None
    if not isinstance(data, dict):
        diags.add_attribute_error(
            "base_job_template", "Normalized JSON Unmarshal Error", "base_job_template must be a JSON object"
        )
        return None
    return data


class WorkPoolResource(Resource[WorkPoolResourceModel]):
    name: ClassVar[str] = "work_pool"
    display_name: ClassVar[str] = "Work Pool"
    model: ClassVar[type[StateModel]] = WorkPoolResourceModel

    def schema(self) -> Schema:
        return Schema(
            description="Work pools bridge the orchestration layer and the infrastructure that runs flows.",
            attributes={
                "id": Attribute(AttrType.STRING, "Work pool ID (UUID)", computed=True, use_state_for_unknown=True),
                "created": Attribute(
                    AttrType.TIMESTAMP,
                    "Timestamp of when the resource was created (RFC3339)",
                    computed=True,
                    use_state_for_unknown=True,
                ),
                "updated": Attribute(
                    AttrType.TIMESTAMP, "Timestamp of when the resource was updated (RFC3339)", computed=True
                ),
                "account_id": Attribute(
                    AttrType.UUID,
                    "Account ID (UUID), defaults to the account set in the provider",
                    optional=True,
                    requires_replace=True,
                ),
                "workspace_id": Attribute(
                    AttrType.UUID,
                    "Workspace ID (UUID) to associate work pool to",
                    optional=True,
                    requires_replace=True,
                ),
                "name": Attribute(AttrType.STRING, "Name of the work pool", required=True, requires_replace=True),
                "description": Attribute(
                    AttrType.STRING, "Description of the work pool", optional=True, computed=True,
                    use_state_for_unknown=True,
                ),
                "type": Attribute(
                    AttrType.STRING, "Type of the work pool (e.g. kubernetes, process)", optional=True,
                    computed=True, use_state_for_unknown=True, requires_replace=True,
                ),
                "paused": Attribute(
                    AttrType.BOOL, "Whether this work pool is paused", optional=True, computed=True, default=False
                ),
                "concurrency_limit": Attribute(
                    AttrType.INT, "The concurrency limit applied to this work pool", optional=True
                ),
                "default_queue_id": Attribute(
                    AttrType.STRING, "The UUID of the default queue associated with this work pool", computed=True,
                    use_state_for_unknown=True,
                ),
                "base_job_template": Attribute(
                    AttrType.JSON, "The base job template for the work pool, as a JSON string", optional=True,
                    computed=True,
                ),
            },
        )

    def create(self, plan: WorkPoolResourceModel) -> OperationResult[WorkPoolResourceModel]:
        result: OperationResult[WorkPoolResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().work_pools, plan.account_id, plan.workspace_id)
        if client is None or not self._require(plan, ("name",), diags):
            return result
        template = _decode_template(plan.base_job_template, diags)
        if diags.has_error():
            return result

        try:
            pool = client.create(
                WorkPoolCreate(
                    name=plan.name,
                    description=plan.description,
                    type=plan.type,
                    paused=plan.paused,
                    concurrency_limit=plan.concurrency_limit,
                    base_job_template=template,
                )
            )
        except PrefectAPIError as exc:
            diags.add_error("Error creating work pool", f"Could not create work pool, unexpected error: {exc}")
            return result

        state = plan.model_copy()
        diags.extend(copy_work_pool_to_model(pool, state))
        if diags.has_error():
            return result
        logger.info("Created work pool %s (%s)", state.name, state.id)
        result.state = state
        return result

    def read(self, state: WorkPoolResourceModel) -> OperationResult[WorkPoolResourceModel]:
        result: OperationResult[WorkPoolResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().work_pools, state.account_id, state.workspace_id)
        if client is None or not self._require(state, ("name",), diags):
            return result

        try:
            pool = client.get(state.name)
        except PrefectAPIError as exc:
            diags.add_error("Error refreshing work pool state", f"Could not read Work Pool, unexpected error: {exc}")
            return result

        model = state.model_copy()
        diags.extend(copy_work_pool_to_model(pool, model))
        if diags.has_error():
            return result
        result.state = model
        return result

    def update(
        self, plan: WorkPoolResourceModel, state: WorkPoolResourceModel | None = None
    ) -> OperationResult[WorkPoolResourceModel]:
        result: OperationResult[WorkPoolResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().work_pools, plan.account_id, plan.workspace_id)
        if client is None or not self._require(plan, ("name",), diags):
            return result
        template = _decode_template(plan.base_job_template, diags)
        if diags.has_error():
            return result

        # The API addresses pools by their current name.
        current_name = state.name if state and state.name else plan.name
        payload = WorkPoolUpdate(
            description=plan.description,
            paused=plan.paused,
            concurrency_limit=plan.concurrency_limit,
            base_job_template=template,
        )
        try:
            client.update(current_name, payload)
        except PrefectAPIError as exc:
            diags.add_error("Error updating work pool", f"Could not update work pool, unexpected error: {exc}")
            return result

        try:
            pool = client.get(current_name)
        except PrefectAPIError as exc:
            diags.add_error("Error refreshing work pool state", f"Could not read Work Pool, unexpected error: {exc}")
            return result

        model = plan.model_copy()
        diags.extend(copy_work_pool_to_model(pool, model))
        if diags.has_error():
            return result
        result.state = model
        return result

    def delete(self, state: WorkPoolResourceModel) -> OperationResult[WorkPoolResourceModel]:
        result: OperationResult[WorkPoolResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().work_pools, state.account_id, state.workspace_id)
        if client is None or not self._require(state, ("name",), diags):
            return result

        try:
            client.delete(state.name)
        except PrefectAPIError as exc:
            diags.add_error("Error deleting Work Pool", f"Could not delete Work Pool, unexpected error: {exc}")
            result.state = state
        return result

    def import_state(self, identifier: str) -> OperationResult[WorkPoolResourceModel]:
        """Import by `name` or `name,workspace_id`."""

        result: OperationResult[WorkPoolResourceModel] = OperationResult()
        parsed = parse_import_identifier(identifier, self.display_name, result.diagnostics)
        if parsed is None:
            return result

        values: dict[str, Any] = {"name": parsed.identifier}
        if parsed.workspace_id is not None:
            values["workspace_id"] = str(parsed.workspace_id)
        state, diags = load_model(WorkPoolResourceModel, values)
        result.diagnostics.extend(diags)
        result.state = state
        return result
