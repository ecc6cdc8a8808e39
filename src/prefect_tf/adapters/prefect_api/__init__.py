"""Prefect REST API clients (one module per resource type).

Why a package:
- Groups the thin per-resource clients (accounts, deployments, ...).
- Each one implements its Protocol from `core.interfaces.client`.
"""

from prefect_tf.adapters.prefect_api.accounts import AccountsClient
from prefect_tf.adapters.prefect_api.client import PrefectClient
from prefect_tf.adapters.prefect_api.deployments import DeploymentsClient
from prefect_tf.adapters.prefect_api.flows import FlowsClient
from prefect_tf.adapters.prefect_api.variables import VariablesClient
from prefect_tf.adapters.prefect_api.work_pools import WorkPoolsClient
from prefect_tf.adapters.prefect_api.workspaces import WorkspacesClient

__all__ = [
    "AccountsClient",
    "DeploymentsClient",
    "FlowsClient",
    "PrefectClient",
    "VariablesClient",
    "WorkPoolsClient",
    "WorkspacesClient",
]
