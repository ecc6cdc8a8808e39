"""Managed resources (CRUD + import).

Each module implements `core.resources.base.Resource` for one remote type.
"""

from prefect_tf.core.resources.account import AccountResource
from prefect_tf.core.resources.base import DataSource, OperationResult, Resource, StateModel
from prefect_tf.core.resources.deployment import DeploymentResource
from prefect_tf.core.resources.flow import FlowResource
from prefect_tf.core.resources.variable import VariableResource
from prefect_tf.core.resources.work_pool import WorkPoolResource
from prefect_tf.core.resources.workspace import WorkspaceResource

__all__ = [
    "AccountResource",
    "DataSource",
    "DeploymentResource",
    "FlowResource",
    "OperationResult",
    "Resource",
    "StateModel",
    "VariableResource",
    "WorkPoolResource",
    "WorkspaceResource",
]
