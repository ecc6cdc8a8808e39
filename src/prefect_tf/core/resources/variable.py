"""Resource: `prefect_variable`."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import ClassVar
from uuid import UUID

from prefect_tf.core.domain.models import Variable, VariableCreate, VariableUpdate
from prefect_tf.core.errors import PrefectAPIError
from prefect_tf.core.resources.base import OperationResult, Resource, StateModel
from prefect_tf.core.schema import Attribute, AttrType, Schema

logger = logging.getLogger(__name__)


class VariableResourceModel(StateModel):
    id: str | None = None
    created: datetime | None = None
    updated: datetime | None = None
    account_id: UUID | None = None
    workspace_id: UUID | None = None
    name: str | None = None
    value: str | None = None
    tags: list[str] | None = None


def copy_variable_to_model(variable: Variable, model: VariableResourceModel) -> None:
    model.id = str(variable.id)
    model.created = variable.created
    model.updated = variable.updated
    model.name = variable.name
    model.value = variable.value
    model.tags = list(variable.tags)


class VariableResource(Resource[VariableResourceModel]):
    name: ClassVar[str] = "variable"
    display_name: ClassVar[str] = "Variable"
    model: ClassVar[type[StateModel]] = VariableResourceModel

    def schema(self) -> Schema:
        return Schema(
            description="Variables store named, mutable string values for use in flows.",
            attributes={
                "id": Attribute(AttrType.STRING, "Variable ID (UUID)", computed=True, use_state_for_unknown=True),
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
                    "Workspace ID (UUID) to associate variable to",
                    optional=True,
                    requires_replace=True,
                ),
                "name": Attribute(AttrType.STRING, "Name of the variable", required=True),
                "value": Attribute(AttrType.STRING, "Value of the variable", required=True),
                "tags": Attribute(
                    AttrType.STRING_LIST,
                    "Tags associated with the variable",
                    optional=True,
                    computed=True,
                    default=[],
                ),
            },
        )

    def create(self, plan: VariableResourceModel) -> OperationResult[VariableResourceModel]:
        result: OperationResult[VariableResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().variables, plan.account_id, plan.workspace_id)
        if client is None or not self._require(plan, ("name", "value"), diags):
            return result

        try:
            variable = client.create(VariableCreate(name=plan.name, value=plan.value, tags=plan.tags))
        except PrefectAPIError as exc:
            diags.add_error("Error creating variable", f"Could not create variable, unexpected error: {exc}")
            return result

        state = plan.model_copy()
        copy_variable_to_model(variable, state)
        logger.info("Created variable %s (%s)", state.name, state.id)
        result.state = state
        return result

    def read(self, state: VariableResourceModel) -> OperationResult[VariableResourceModel]:
        result: OperationResult[VariableResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().variables, state.account_id, state.workspace_id)
        if client is None:
            return result
        variable_id = self._parse_id(state.id, diags)
        if variable_id is None:
            return result

        try:
            variable = client.get(variable_id)
        except PrefectAPIError as exc:
            diags.add_error("Error refreshing variable state", f"Could not read Variable, unexpected error: {exc}")
            return result

        model = state.model_copy()
        copy_variable_to_model(variable, model)
        result.state = model
        return result

    def update(
        self, plan: VariableResourceModel, state: VariableResourceModel | None = None
    ) -> OperationResult[VariableResourceModel]:
        result: OperationResult[VariableResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().variables, plan.account_id, plan.workspace_id)
        if client is None:
            return result
        variable_id = self._parse_id(plan.id or (state.id if state else None), diags)
        if variable_id is None:
            return result

        try:
            client.update(variable_id, VariableUpdate(name=plan.name, value=plan.value, tags=plan.tags))
        except PrefectAPIError as exc:
            diags.add_error("Error updating variable", f"Could not update variable, unexpected error: {exc}")
            return result

        try:
            variable = client.get(variable_id)
        except PrefectAPIError as exc:
            diags.add_error("Error refreshing variable state", f"Could not read Variable, unexpected error: {exc}")
            return result

        model = plan.model_copy()
        copy_variable_to_model(variable, model)
        result.state = model
        return result

    def delete(self, state: VariableResourceModel) -> OperationResult[VariableResourceModel]:
        result: OperationResult[VariableResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().variables, state.account_id, state.workspace_id)
        if client is None:
            return result
        variable_id = self._parse_id(state.id, diags)
        if variable_id is None:
            return result

        try:
            client.delete(variable_id)
        except PrefectAPIError as exc:
            diags.add_error("Error deleting Variable", f"Could not delete Variable, unexpected error: {exc}")
            result.state = state
        return result
