"""Data source: `prefect_workspace`, looked up by `id` or by `handle`."""

from __future__ import annotations

from typing import ClassVar

from prefect_tf.core.errors import PrefectAPIError
from prefect_tf.core.helpers import parse_uuid, parse_uuid_error_diagnostic
from prefect_tf.core.resources.base import DataSource, OperationResult, StateModel
from prefect_tf.core.resources.workspace import (
    WorkspaceResourceModel,
    copy_workspace_to_model,
    workspace_schema_attributes,
)
from prefect_tf.core.schema import Schema


class WorkspaceDataSourceModel(WorkspaceResourceModel):
    pass


class WorkspaceDataSource(DataSource[WorkspaceDataSourceModel]):
    name: ClassVar[str] = "workspace"
    display_name: ClassVar[str] = "Workspace"
    model: ClassVar[type[StateModel]] = WorkspaceDataSourceModel

    def schema(self) -> Schema:
        return Schema(
            description="Get information about an existing Workspace, by `id` or `handle`.",
            attributes=workspace_schema_attributes(lookup=True),
        )

    def read(self, config: WorkspaceDataSourceModel) -> OperationResult[WorkspaceDataSourceModel]:
        result: OperationResult[WorkspaceDataSourceModel] = OperationResult()
        diags = result.diagnostics

        if not config.id and not config.handle:
            diags.add_error(
                "Both ID and Handle are unset",
                "Either a Workspace ID or Handle is required to read a Workspace.",
            )
            return result

        client = self._api(diags, self._client().workspaces, config.account_id)
        if client is None:
            return result

        # If both are set, we prefer the ID
        try:
            if config.id:
                try:
                    workspace_id = parse_uuid(config.id)
                except ValueError as exc:
                    diags.append(parse_uuid_error_diagnostic("Workspace", exc))
                    return result
                workspace = client.get(workspace_id)
            else:
                matches = client.list([config.handle])
                if len(matches) != 1:
                    diags.add_error(
                        "Could not find Workspace",
                        f"Could not find Workspace with handle {config.handle!r} ({len(matches)} matches)",
                    )
                    return result
                workspace = matches[0]
        except PrefectAPIError as exc:
            diags.add_error("Error refreshing Workspace state", f"Could not read Workspace, unexpected error: {exc}")
            return result

        model = config.model_copy()
        copy_workspace_to_model(workspace, model)
        result.state = model
        return result
