"""Resource: `prefect_workspace` (Prefect Cloud only, account scoped)."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import ClassVar
from uuid import UUID

from prefect_tf.core.domain.models import Workspace, WorkspaceCreate, WorkspaceUpdate
from prefect_tf.core.errors import PrefectAPIError
from prefect_tf.core.resources.base import OperationResult, Resource, StateModel, load_model
from prefect_tf.core.schema import Attribute, AttrType, Schema

logger = logging.getLogger(__name__)


class WorkspaceResourceModel(StateModel):
    id: str | None = None
    created: datetime | None = None
    updated: datetime | None = None
    account_id: UUID | None = None
    name: str | None = None
    handle: str | None = None
    description: str | None = None


def copy_workspace_to_model(workspace: Workspace, model: WorkspaceResourceModel) -> None:
    model.id = str(workspace.id)
    model.created = workspace.created
    model.updated = workspace.updated
    if workspace.account_id is not None:
        model.account_id = workspace.account_id
    model.name = workspace.name
    model.handle = workspace.handle
    model.description = workspace.description


def workspace_schema_attributes(*, lookup: bool = False) -> dict[str, Attribute]:
    """Attributes shared by the workspace resource and data source.

    With `lookup`, `id` and `handle` become optional inputs and everything
    else is computed.
    """

    return {
        "id": Attribute(
            AttrType.STRING if not lookup else AttrType.UUID,
            "Workspace ID (UUID)",
            optional=lookup,
            computed=True,
            use_state_for_unknown=not lookup,
        ),
        "created": Attribute(
            AttrType.TIMESTAMP, "Timestamp of when the resource was created (RFC3339)", computed=True,
            use_state_for_unknown=not lookup,
        ),
        "updated": Attribute(
            AttrType.TIMESTAMP, "Timestamp of when the resource was updated (RFC3339)", computed=True
        ),
        "account_id": Attribute(
            AttrType.UUID,
            "Account ID (UUID), defaults to the account set in the provider",
            optional=True,
            computed=not lookup,
            use_state_for_unknown=not lookup,
            requires_replace=not lookup,
        ),
        "name": Attribute(AttrType.STRING, "Name of the workspace", required=not lookup, computed=lookup),
        "handle": Attribute(
            AttrType.STRING, "Unique handle for the workspace", required=not lookup, optional=lookup, computed=lookup
        ),
        "description": Attribute(
            AttrType.STRING, "Description for the workspace", optional=not lookup, computed=True,
            use_state_for_unknown=not lookup,
        ),
    }


class WorkspaceResource(Resource[WorkspaceResourceModel]):
    name: ClassVar[str] = "workspace"
    display_name: ClassVar[str] = "Workspace"
    model: ClassVar[type[StateModel]] = WorkspaceResourceModel

    def schema(self) -> Schema:
        return Schema(description="Resource representing a Prefect Workspace", attributes=workspace_schema_attributes())

    def create(self, plan: WorkspaceResourceModel) -> OperationResult[WorkspaceResourceModel]:
        result: OperationResult[WorkspaceResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().workspaces, plan.account_id)
        if client is None or not self._require(plan, ("name", "handle"), diags):
            return result

        try:
            workspace = client.create(
                WorkspaceCreate(name=plan.name, handle=plan.handle, description=plan.description)
            )
        except PrefectAPIError as exc:
            diags.add_error("Error creating workspace", f"Could not create workspace, unexpected error: {exc}")
            return result

        state = plan.model_copy()
        copy_workspace_to_model(workspace, state)
        logger.info("Created workspace %s (%s)", state.handle, state.id)
        result.state = state
        return result

    def read(self, state: WorkspaceResourceModel) -> OperationResult[WorkspaceResourceModel]:
        result: OperationResult[WorkspaceResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().workspaces, state.account_id)
        if client is None:
            return result
        workspace_id = self._parse_id(state.id, diags)
        if workspace_id is None:
            return result

        try:
            workspace = client.get(workspace_id)
        except PrefectAPIError as exc:
            diags.add_error("Error refreshing Workspace state", f"Could not read Workspace, unexpected error: {exc}")
            return result

        model = state.model_copy()
        copy_workspace_to_model(workspace, model)
        result.state = model
        return result

    def update(
        self, plan: WorkspaceResourceModel, state: WorkspaceResourceModel | None = None
    ) -> OperationResult[WorkspaceResourceModel]:
        result: OperationResult[WorkspaceResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().workspaces, plan.account_id)
        if client is None:
            return result
        workspace_id = self._parse_id(plan.id or (state.id if state else None), diags)
        if workspace_id is None:
            return result

        try:
            client.update(
                workspace_id,
                WorkspaceUpdate(name=plan.name, handle=plan.handle, description=plan.description),
            )
        except PrefectAPIError as exc:
            diags.add_error("Error updating Workspace", f"Could not update Workspace, unexpected error: {exc}")
            return result

        try:
            workspace = client.get(workspace_id)
        except PrefectAPIError as exc:
            diags.add_error("Error refreshing Workspace state", f"Could not read Workspace, unexpected error: {exc}")
            return result

        model = plan.model_copy()
        copy_workspace_to_model(workspace, model)
        result.state = model
        return result

    def delete(self, state: WorkspaceResourceModel) -> OperationResult[WorkspaceResourceModel]:
        result: OperationResult[WorkspaceResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().workspaces, state.account_id)
        if client is None:
            return result
        workspace_id = self._parse_id(state.id, diags)
        if workspace_id is None:
            return result

        try:
            client.delete(workspace_id)
        except PrefectAPIError as exc:
            diags.add_error("Error deleting Workspace", f"Could not delete Workspace, unexpected error: {exc}")
            result.state = state
        return result

    def import_state(self, identifier: str) -> OperationResult[WorkspaceResourceModel]:
        """Workspaces are imported by `id` alone."""

        result: OperationResult[WorkspaceResourceModel] = OperationResult()
        if "," in identifier or not identifier:
            result.diagnostics.add_error(
                "Unexpected Import Identifier",
                f"Expected a single import identifier, in the form of `id`. Got {json.dumps(identifier)}",
            )
            return result
        state, diags = load_model(WorkspaceResourceModel, {"id": identifier})
        result.diagnostics.extend(diags)
        result.state = state
        return result
