"""Resource: `prefect_deployment`.

Deployments are server-side representations of flows: they store the
metadata needed for remote orchestration (when, where and how a workflow
runs) so that runs can be triggered through the API.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, ClassVar
from uuid import UUID

from prefect_tf.core.domain.diagnostics import Diagnostics
from prefect_tf.core.domain.models import Deployment, DeploymentCreate, DeploymentUpdate
from prefect_tf.core.errors import PrefectAPIError
from prefect_tf.core.helpers import dump_json, serialize_data_error_diagnostic
from prefect_tf.core.resources.base import OperationResult, Resource, StateModel
from prefect_tf.core.schema import Attribute, AttrType, Schema

logger = logging.getLogger(__name__)


class DeploymentResourceModel(StateModel):
    id: str | None = None
    created: datetime | None = None
    updated: datetime | None = None

    account_id: UUID | None = None
    workspace_id: UUID | None = None

    description: str | None = None
    enforce_parameter_schema: bool | None = None
    entrypoint: str | None = None
    flow_id: UUID | None = None
    manifest_path: str | None = None
    name: str | None = None
    parameters: str | None = None
    path: str | None = None
    paused: bool | None = None
    tags: list[str] | None = None
    version: str | None = None
    work_pool_name: str | None = None
    work_queue_name: str | None = None


def _optional_string(description: str) -> Attribute:
    return Attribute(
        AttrType.STRING,
        description,
        optional=True,
        computed=True,
        use_state_for_unknown=True,
    )


def copy_deployment_to_model(deployment: Deployment, model: DeploymentResourceModel) -> Diagnostics:
    """Mirror an API deployment into `model` (in place)."""

    diags = Diagnostics()
    model.id = str(deployment.id)
    model.created = deployment.created
    model.updated = deployment.updated

    model.description = deployment.description
    model.enforce_parameter_schema = deployment.enforce_parameter_schema
    model.entrypoint = deployment.entrypoint
    model.flow_id = deployment.flow_id
    model.manifest_path = deployment.manifest_path
    model.name = deployment.name
    model.path = deployment.path
    model.paused = deployment.paused
    model.version = deployment.version
    model.work_pool_name = deployment.work_pool_name
    model.work_queue_name = deployment.work_queue_name
    model.tags = list(deployment.tags)

    try:
        model.parameters = dump_json(deployment.parameters)
    except (TypeError, ValueError) as exc:
        diags.append(serialize_data_error_diagnostic("parameters", "Deployment parameters", exc))
    return diags


def decode_parameters(raw: str | None, diags: Diagnostics) -> dict[str, Any] | None:
    """Decode the `parameters` JSON string. Unset or `null` means "let the server decide"."""

    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except ValueError as exc:
        diags.add_attribute_error(
            "parameters", "Normalized JSON Unmarshal Error", f"Could not decode parameters: {exc}"
        )
        return None
    if data is None:
        return None
    if not isinstance(data, dict):
        diags.add_attribute_error(
            "parameters", "Normalized JSON Unmarshal Error", "parameters must be a JSON object"
        )
        return None
    return data


class DeploymentResource(Resource[DeploymentResourceModel]):
    name: ClassVar[str] = "deployment"
    display_name: ClassVar[str] = "Deployment"
    model: ClassVar[type[StateModel]] = DeploymentResourceModel

    def schema(self) -> Schema:
        return Schema(
            description=(
                "Deployments are server-side representations of flows. "
                "They store the crucial metadata needed for remote orchestration including when, "
                "where, and how a workflow should run. Deployments elevate workflows from functions "
                "that you must call manually to API-managed entities that can be triggered remotely."
            ),
            attributes={
                "id": Attribute(
                    AttrType.STRING, "Deployment ID (UUID)", computed=True, use_state_for_unknown=True
                ),
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
                    "Workspace ID (UUID) to associate deployment to",
                    optional=True,
                    requires_replace=True,
                ),
                "name": Attribute(AttrType.STRING, "Name of the deployment", required=True, requires_replace=True),
                "flow_id": Attribute(
                    AttrType.UUID, "Flow ID (UUID) to associate deployment to", required=True, requires_replace=True
                ),
                "paused": Attribute(
                    AttrType.BOOL,
                    "Whether or not the deployment is paused.",
                    optional=True,
                    computed=True,
                    default=False,
                ),
                "enforce_parameter_schema": Attribute(
                    AttrType.BOOL,
                    "Whether or not the deployment should enforce the parameter schema.",
                    optional=True,
                    computed=True,
                    default=False,
                ),
                "manifest_path": _optional_string(
                    "The path to the flow's manifest file, relative to the chosen storage."
                ),
                "work_queue_name": _optional_string(
                    "The work queue for the deployment. If no work queue is set, work will not be scheduled."
                ),
                "work_pool_name": _optional_string("The name of the deployment's work pool."),
                "description": _optional_string("A description for the deployment."),
                "path": _optional_string(
                    "The path to the working directory for the workflow, "
                    "relative to remote storage or an absolute path."
                ),
                "version": _optional_string("An optional version for the deployment."),
                "entrypoint": _optional_string(
                    "The path to the entrypoint for the workflow, relative to the path."
                ),
                "tags": Attribute(
                    AttrType.STRING_LIST,
                    "Tags associated with the deployment",
                    optional=True,
                    computed=True,
                    default=[],
                ),
                "parameters": Attribute(
                    AttrType.JSON,
                    "Parameters for flow runs scheduled by the deployment.",
                    optional=True,
                    computed=True,
                ),
            },
        )

    def create(self, plan: DeploymentResourceModel) -> OperationResult[DeploymentResourceModel]:
        result: OperationResult[DeploymentResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().deployments, plan.account_id, plan.workspace_id)
        if client is None or not self._require(plan, ("name", "flow_id"), diags):
            return result

        parameters = decode_parameters(plan.parameters, diags)
        if diags.has_error():
            return result

        try:
            deployment = client.create(
                DeploymentCreate(
                    description=plan.description,
                    enforce_parameter_schema=plan.enforce_parameter_schema,
                    entrypoint=plan.entrypoint,
                    flow_id=plan.flow_id,
                    manifest_path=plan.manifest_path,
                    name=plan.name,
                    parameters=parameters,
                    path=plan.path,
                    paused=plan.paused,
                    tags=plan.tags,
                    version=plan.version,
                    work_pool_name=plan.work_pool_name,
                    work_queue_name=plan.work_queue_name,
                )
            )
        except PrefectAPIError as exc:
            diags.add_error("Error creating deployment", f"Could not create deployment, unexpected error: {exc}")
            return result

        state = plan.model_copy()
        diags.extend(copy_deployment_to_model(deployment, state))
        if diags.has_error():
            return result

        logger.info("Created deployment %s (%s)", state.name, state.id)
        result.state = state
        return result

    def read(self, state: DeploymentResourceModel) -> OperationResult[DeploymentResourceModel]:
        result: OperationResult[DeploymentResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().deployments, state.account_id, state.workspace_id)
        if client is None:
            return result

        deployment_id = self._parse_id(state.id, diags)
        if deployment_id is None:
            return result

        try:
            deployment = client.get(deployment_id)
        except PrefectAPIError as exc:
            diags.add_error("Error refreshing deployment state", f"Could not read Deployment, unexpected error: {exc}")
            return result

        model = state.model_copy()
        diags.extend(copy_deployment_to_model(deployment, model))
        if diags.has_error():
            return result

        result.state = model
        return result

    def update(
        self, plan: DeploymentResourceModel, state: DeploymentResourceModel | None = None
    ) -> OperationResult[DeploymentResourceModel]:
        result: OperationResult[DeploymentResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().deployments, plan.account_id, plan.workspace_id)
        if client is None:
            return result

        deployment_id = self._parse_id(plan.id or (state.id if state else None), diags)
        if deployment_id is None:
            return result

        parameters = decode_parameters(plan.parameters, diags)
        if diags.has_error():
            return result

        payload = DeploymentUpdate(
            description=plan.description,
            enforce_parameter_schema=plan.enforce_parameter_schema,
            entrypoint=plan.entrypoint,
            manifest_path=plan.manifest_path,
            parameters=parameters,
            path=plan.path,
            paused=plan.paused,
            tags=plan.tags,
            version=plan.version,
            work_pool_name=plan.work_pool_name,
            work_queue_name=plan.work_queue_name,
        )
        try:
            client.update(deployment_id, payload)
        except PrefectAPIError as exc:
            diags.add_error("Error updating deployment", f"Could not update deployment, unexpected error: {exc}")
            return result

        try:
            deployment = client.get(deployment_id)
        except PrefectAPIError as exc:
            diags.add_error("Error refreshing Deployment state", f"Could not read Deployment, unexpected error: {exc}")
            return result

        model = plan.model_copy()
        diags.extend(copy_deployment_to_model(deployment, model))
        if diags.has_error():
            return result

        logger.info("Updated deployment %s (%s)", model.name, model.id)
        result.state = model
        return result

    def delete(self, state: DeploymentResourceModel) -> OperationResult[DeploymentResourceModel]:
        result: OperationResult[DeploymentResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().deployments, state.account_id, state.workspace_id)
        if client is None:
            return result

        deployment_id = self._parse_id(state.id, diags)
        if deployment_id is None:
            return result

        try:
            client.delete(deployment_id)
        except PrefectAPIError as exc:
            diags.add_error("Error deleting Deployment", f"Could not delete Deployment, unexpected error: {exc}")
            result.state = state
            return result

        logger.info("Deleted deployment %s", deployment_id)
        return result
