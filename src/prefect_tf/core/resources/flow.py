"""Resource: `prefect_flow`."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import ClassVar
from uuid import UUID

from prefect_tf.core.domain.models import Flow, FlowCreate, FlowUpdate
from prefect_tf.core.errors import PrefectAPIError
from prefect_tf.core.resources.base import OperationResult, Resource, StateModel
from prefect_tf.core.schema import Attribute, AttrType, Schema

logger = logging.getLogger(__name__)


class FlowResourceModel(StateModel):
    id: str | None = None
    created: datetime | None = None
    updated: datetime | None = None
    account_id: UUID | None = None
    workspace_id: UUID | None = None
    name: str | None = None
    tags: list[str] | None = None


def copy_flow_to_model(flow: Flow, model: FlowResourceModel) -> None:
    model.id = str(flow.id)
    model.created = flow.created
    model.updated = flow.updated
    model.name = flow.name
    model.tags = list(flow.tags)


class FlowResource(Resource[FlowResourceModel]):
    name: ClassVar[str] = "flow"
    display_name: ClassVar[str] = "Flow"
    model: ClassVar[type[StateModel]] = FlowResourceModel

    def schema(self) -> Schema:
        return Schema(
            description="Flows are the most basic Prefect object: a container for workflow logic.",
            attributes={
                "id": Attribute(AttrType.STRING, "Flow ID (UUID)", computed=True, use_state_for_unknown=True),
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
                    "Workspace ID (UUID) to associate flow to",
                    optional=True,
                    requires_replace=True,
                ),
                "name": Attribute(AttrType.STRING, "Name of the flow", required=True, requires_replace=True),
                "tags": Attribute(
                    AttrType.STRING_LIST, "Tags associated with the flow", optional=True, computed=True, default=[]
                ),
            },
        )

    def create(self, plan: FlowResourceModel) -> OperationResult[FlowResourceModel]:
        result: OperationResult[FlowResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().flows, plan.account_id, plan.workspace_id)
        if client is None or not self._require(plan, ("name",), diags):
            return result

        try:
            flow = client.create(FlowCreate(name=plan.name, tags=plan.tags or []))
        except PrefectAPIError as exc:
            diags.add_error("Error creating flow", f"Could not create flow, unexpected error: {exc}")
            return result

        state = plan.model_copy()
        copy_flow_to_model(flow, state)
        logger.info("Created flow %s (%s)", state.name, state.id)
        result.state = state
        return result

    def read(self, state: FlowResourceModel) -> OperationResult[FlowResourceModel]:
        result: OperationResult[FlowResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().flows, state.account_id, state.workspace_id)
        if client is None:
            return result
        flow_id = self._parse_id(state.id, diags)
        if flow_id is None:
            return result

        try:
            flow = client.get(flow_id)
        except PrefectAPIError as exc:
            diags.add_error("Error refreshing flow state", f"Could not read Flow, unexpected error: {exc}")
            return result

        model = state.model_copy()
        copy_flow_to_model(flow, model)
        result.state = model
        return result

    def update(
        self, plan: FlowResourceModel, state: FlowResourceModel | None = None
    ) -> OperationResult[FlowResourceModel]:
        result: OperationResult[FlowResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().flows, plan.account_id, plan.workspace_id)
        if client is None:
            return result
        flow_id = self._parse_id(plan.id or (state.id if state else None), diags)
        if flow_id is None:
            return result

        try:
            client.update(flow_id, FlowUpdate(tags=plan.tags))
            flow = client.get(flow_id)
        except PrefectAPIError as exc:
            diags.add_error("Error updating flow", f"Could not update flow, unexpected error: {exc}")
            return result

        model = plan.model_copy()
        copy_flow_to_model(flow, model)
        result.state = model
        return result

    def delete(self, state: FlowResourceModel) -> OperationResult[FlowResourceModel]:
        result: OperationResult[FlowResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().flows, state.account_id, state.workspace_id)
        if client is None:
            return result
        flow_id = self._parse_id(state.id, diags)
        if flow_id is None:
            return result

        try:
            client.delete(flow_id)
        except PrefectAPIError as exc:
            diags.add_error("Error deleting Flow", f"Could not delete Flow, unexpected error: {exc}")
            result.state = state
        return result
