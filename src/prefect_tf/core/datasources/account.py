"""Data source: `prefect_account`."""

from __future__ import annotations

from typing import ClassVar
from uuid import UUID

from prefect_tf.core.errors import PrefectAPIError
from prefect_tf.core.helpers import parse_uuid, parse_uuid_error_diagnostic
from prefect_tf.core.resources.account import AccountResourceModel, account_schema_attributes, copy_account_to_model
from prefect_tf.core.resources.base import DataSource, OperationResult, StateModel
from prefect_tf.core.schema import Schema


class AccountDataSourceModel(AccountResourceModel):
    pass


class AccountDataSource(DataSource[AccountDataSourceModel]):
    name: ClassVar[str] = "account"
    display_name: ClassVar[str] = "Account"
    model: ClassVar[type[StateModel]] = AccountDataSourceModel

    def schema(self) -> Schema:
        return Schema(
            description="Get information about an existing Account, by ID (defaults to the provider account).",
            attributes=account_schema_attributes(lookup=True),
        )

    def read(self, config: AccountDataSourceModel) -> OperationResult[AccountDataSourceModel]:
        result: OperationResult[AccountDataSourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._client()
        account_id: UUID | None = getattr(client, "default_account_id", None)
        if config.id:
            try:
                account_id = parse_uuid(config.id)
            except ValueError as exc:
                diags.append(parse_uuid_error_diagnostic("Account", exc))
                return result
        if account_id is None:
            diags.add_attribute_error(
                "id",
                "Missing Account ID",
                "Set `id`, or configure a default account on the provider.",
            )
            return result

        try:
            account = client.accounts().get(account_id)
        except PrefectAPIError as exc:
            diags.add_error("Error refreshing Account state", f"Could not read Account, unexpected error: {exc}")
            return result

        model = config.model_copy()
        copy_account_to_model(account, model)
        result.state = model
        return result
