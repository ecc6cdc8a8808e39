"""Contracts for the Prefect API clients.

Why Protocol:
- Resources depend on a structural contract, not on the httpx adapter.
- Tests can pass any object with the right methods instead of a real client.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable
from uuid import UUID

from prefect_tf.core.domain.models import (
    AccountResponse,
    AccountUpdate,
    Deployment,
    DeploymentCreate,
    DeploymentUpdate,
    Flow,
    FlowCreate,
    FlowUpdate,
    Variable,
    VariableCreate,
    VariableUpdate,
    WorkPool,
    WorkPoolCreate,
    WorkPoolUpdate,
    Workspace,
    WorkspaceCreate,
    WorkspaceUpdate,
)


@runtime_checkable
class AccountsClient(Protocol):
    def get(self, account_id: UUID) -> AccountResponse: ...

    def update(self, account_id: UUID, data: AccountUpdate) -> None: ...

    def delete(self, account_id: UUID) -> None: ...


@runtime_checkable
class WorkspacesClient(Protocol):
    def create(self, data: WorkspaceCreate) -> Workspace: ...

    def list(self, handles: Sequence[str] = ()) -> list[Workspace]: ...

    def get(self, workspace_id: UUID) -> Workspace: ...

    def update(self, workspace_id: UUID, data: WorkspaceUpdate) -> None: ...

    def delete(self, workspace_id: UUID) -> None: ...


@runtime_checkable
class DeploymentsClient(Protocol):
    def create(self, data: DeploymentCreate) -> Deployment: ...

    def get(self, deployment_id: UUID) -> Deployment: ...

    def update(self, deployment_id: UUID, data: DeploymentUpdate) -> None: ...

    def delete(self, deployment_id: UUID) -> None: ...


@runtime_checkable
class FlowsClient(Protocol):
    def create(self, data: FlowCreate) -> Flow: ...

    def get(self, flow_id: UUID) -> Flow: ...

    def update(self, flow_id: UUID, data: FlowUpdate) -> None: ...

    def delete(self, flow_id: UUID) -> None: ...


@runtime_checkable
class WorkPoolsClient(Protocol):
    def create(self, data: WorkPoolCreate) -> WorkPool: ...

    def list(self, names: Sequence[str] = ()) -> list[WorkPool]: ...

    def get(self, name: str) -> WorkPool: ...

    def update(self, name: str, data: WorkPoolUpdate) -> None: ...

    def delete(self, name: str) -> None: ...


@runtime_checkable
class VariablesClient(Protocol):
    def create(self, data: VariableCreate) -> Variable: ...

    def get(self, variable_id: UUID) -> Variable: ...

    def get_by_name(self, name: str) -> Variable: ...

    def update(self, variable_id: UUID, data: VariableUpdate) -> None: ...

    def delete(self, variable_id: UUID) -> None: ...


@runtime_checkable
class PrefectClient(Protocol):
    """Factory of per-resource clients.

    `None` IDs fall back to the provider defaults. Factories raise
    `ClientConfigurationError` when the IDs cannot form a valid scope.
    """

    def accounts(self) -> AccountsClient: ...

    def workspaces(self, account_id: UUID | None = None) -> WorkspacesClient: ...

    def deployments(
        self, account_id: UUID | None = None, workspace_id: UUID | None = None
    ) -> DeploymentsClient: ...

    def flows(self, account_id: UUID | None = None, workspace_id: UUID | None = None) -> FlowsClient: ...

    def work_pools(
        self, account_id: UUID | None = None, workspace_id: UUID | None = None
    ) -> WorkPoolsClient: ...

    def variables(
        self, account_id: UUID | None = None, workspace_id: UUID | None = None
    ) -> VariablesClient: ...
