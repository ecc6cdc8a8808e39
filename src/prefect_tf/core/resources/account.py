"""Resource: `prefect_account` (Prefect Cloud only).

Accounts cannot be created through the API: the resource is import-only and
manages the settings of an existing account.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import ClassVar

from prefect_tf.core.domain.models import AccountResponse, AccountUpdate
from prefect_tf.core.errors import PrefectAPIError
from prefect_tf.core.resources.base import OperationResult, Resource, StateModel, load_model
from prefect_tf.core.schema import Attribute, AttrType, Schema

logger = logging.getLogger(__name__)


class AccountResourceModel(StateModel):
    id: str | None = None
    created: datetime | None = None
    updated: datetime | None = None
    name: str | None = None
    handle: str | None = None
    location: str | None = None
    link: str | None = None
    billing_email: str | None = None
    allow_public_workspaces: bool | None = None


def copy_account_to_model(account: AccountResponse, model: AccountResourceModel) -> None:
    model.id = str(account.id)
    model.created = account.created
    model.updated = account.updated
    model.name = account.name
    model.handle = account.handle
    model.location = account.location
    model.link = account.link
    model.billing_email = account.billing_email
    model.allow_public_workspaces = account.allow_public_workspaces


def account_schema_attributes(*, lookup: bool = False) -> dict[str, Attribute]:
    settable = not lookup
    return {
        "id": Attribute(AttrType.UUID, "Account ID (UUID)", optional=lookup, computed=True, use_state_for_unknown=True),
        "created": Attribute(
            AttrType.TIMESTAMP, "Timestamp of when the resource was created (RFC3339)", computed=True,
            use_state_for_unknown=True,
        ),
        "updated": Attribute(AttrType.TIMESTAMP, "Timestamp of when the resource was updated (RFC3339)", computed=True),
        "name": Attribute(AttrType.STRING, "Name of the account", required=settable, computed=lookup),
        "handle": Attribute(AttrType.STRING, "Unique handle of the account", required=settable, computed=lookup),
        "location": Attribute(AttrType.STRING, "An optional physical location for the account", optional=settable,
                              computed=lookup),
        "link": Attribute(AttrType.STRING, "An optional website link for the account", optional=settable,
                          computed=lookup),
        "billing_email": Attribute(AttrType.STRING, "Billing email to apply to the account's Stripe customer",
                                   optional=settable, computed=lookup),
        "allow_public_workspaces": Attribute(AttrType.BOOL, "Whether or not this account allows public workspaces",
                                             optional=settable, computed=True),
    }


class AccountResource(Resource[AccountResourceModel]):
    name: ClassVar[str] = "account"
    display_name: ClassVar[str] = "Account"
    model: ClassVar[type[StateModel]] = AccountResourceModel

    def schema(self) -> Schema:
        return Schema(
            description="Resource representing a Prefect Cloud account. Accounts must be imported, not created.",
            attributes=account_schema_attributes(),
        )

    def create(self, plan: AccountResourceModel) -> OperationResult[AccountResourceModel]:
        result: OperationResult[AccountResourceModel] = OperationResult()
        result.diagnostics.add_error(
            "Cannot create account",
            "Account is an import-only resource and cannot be created by this provider.",
        )
        return result

    def read(self, state: AccountResourceModel) -> OperationResult[AccountResourceModel]:
        result: OperationResult[AccountResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().accounts)
        if client is None:
            return result
        account_id = self._parse_id(state.id, diags)
        if account_id is None:
            return result

        try:
            account = client.get(account_id)
        except PrefectAPIError as exc:
            diags.add_error("Error refreshing Account state", f"Could not read Account, unexpected error: {exc}")
            return result

        model = state.model_copy()
        copy_account_to_model(account, model)
        result.state = model
        return result

    def update(
        self, plan: AccountResourceModel, state: AccountResourceModel | None = None
    ) -> OperationResult[AccountResourceModel]:
        result: OperationResult[AccountResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().accounts)
        if client is None:
            return result
        account_id = self._parse_id(plan.id or (state.id if state else None), diags)
        if account_id is None:
            return result

        payload = AccountUpdate(
            name=plan.name,
            handle=plan.handle,
            location=plan.location,
            link=plan.link,
            billing_email=plan.billing_email,
            allow_public_workspaces=plan.allow_public_workspaces,
        )
        try:
            client.update(account_id, payload)
            account = client.get(account_id)
        except PrefectAPIError as exc:
            diags.add_error("Error updating Account", f"Could not update Account, unexpected error: {exc}")
            return result

        model = plan.model_copy()
        copy_account_to_model(account, model)
        logger.info("Updated account %s (%s)", model.handle, model.id)
        result.state = model
        return result

    def delete(self, state: AccountResourceModel) -> OperationResult[AccountResourceModel]:
        result: OperationResult[AccountResourceModel] = OperationResult()
        diags = result.diagnostics

        client = self._api(diags, self._client().accounts)
        if client is None:
            return result
        account_id = self._parse_id(state.id, diags)
        if account_id is None:
            return result

        try:
            client.delete(account_id)
        except PrefectAPIError as exc:
            diags.add_error("Error deleting Account", f"Could not delete Account, unexpected error: {exc}")
            result.state = state
        return result

    def import_state(self, identifier: str) -> OperationResult[AccountResourceModel]:
        result: OperationResult[AccountResourceModel] = OperationResult()
        if "," in identifier or not identifier:
            result.diagnostics.add_error(
                "Unexpected Import Identifier",
                f"Expected a single import identifier, in the form of `id`. Got {json.dumps(identifier)}",
            )
            return result
        state, diags = load_model(AccountResourceModel, {"id": identifier})
        result.diagnostics.extend(diags)
        result.state = state
        return result
