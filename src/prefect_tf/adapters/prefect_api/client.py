"""Top-level Prefect API client: a factory of per-resource clients.

All per-resource clients share one `httpx.Client` (and its headers).
"""

from __future__ import annotations

import logging
from uuid import UUID

import httpx

from prefect_tf.adapters.http_client import account_scoped_url, build_client, workspace_scoped_url
from prefect_tf.adapters.prefect_api.accounts import AccountsClient
from prefect_tf.adapters.prefect_api.deployments import DeploymentsClient
from prefect_tf.adapters.prefect_api.flows import FlowsClient
from prefect_tf.adapters.prefect_api.variables import VariablesClient
from prefect_tf.adapters.prefect_api.work_pools import WorkPoolsClient
from prefect_tf.adapters.prefect_api.workspaces import WorkspacesClient
from prefect_tf.core.config import AppSettings
from prefect_tf.core.errors import ClientConfigurationError

logger = logging.getLogger(__name__)


class PrefectClient:
    """Implements `core.interfaces.client.PrefectClient` over httpx."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        http: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._http = http or build_client(self._settings, transport=transport)
        self.endpoint = self._settings.api_url
        self.default_account_id = self._settings.cloud_account_id
        self.default_workspace_id = self._settings.cloud_workspace_id

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "PrefectClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _workspace_scope(
        self, account_id: UUID | None, workspace_id: UUID | None
    ) -> tuple[UUID | None, UUID | None]:
        account_id = account_id or self.default_account_id
        workspace_id = workspace_id or self.default_workspace_id
        if account_id is not None and workspace_id is None:
            raise ClientConfigurationError("a workspace_id must be set when an account_id is set")
        return account_id, workspace_id

    def _scoped(self, account_id: UUID | None, workspace_id: UUID | None, resource: str) -> str:
        account_id, workspace_id = self._workspace_scope(account_id, workspace_id)
        url = workspace_scoped_url(self.endpoint, account_id, workspace_id, resource)
        logger.debug("Using %s collection at %s", resource, url)
        return url

    def accounts(self) -> AccountsClient:
        return AccountsClient(self._http, f"{self.endpoint}/accounts")

    def workspaces(self, account_id: UUID | None = None) -> WorkspacesClient:
        account_id = account_id or self.default_account_id
        if account_id is None:
            raise ClientConfigurationError("an account_id must be set to manage workspaces")
        return WorkspacesClient(self._http, account_scoped_url(self.endpoint, account_id, "workspaces"))

    def deployments(
        self, account_id: UUID | None = None, workspace_id: UUID | None = None
    ) -> DeploymentsClient:
        return DeploymentsClient(self._http, self._scoped(account_id, workspace_id, "deployments"))

    def flows(self, account_id: UUID | None = None, workspace_id: UUID | None = None) -> FlowsClient:
        return FlowsClient(self._http, self._scoped(account_id, workspace_id, "flows"))

    def work_pools(
        self, account_id: UUID | None = None, workspace_id: UUID | None = None
    ) -> WorkPoolsClient:
        return WorkPoolsClient(self._http, self._scoped(account_id, workspace_id, "work_pools"))

    def variables(
        self, account_id: UUID | None = None, workspace_id: UUID | None = None
    ) -> VariablesClient:
        return VariablesClient(self._http, self._scoped(account_id, workspace_id, "variables"))
