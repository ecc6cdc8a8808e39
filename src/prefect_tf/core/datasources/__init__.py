"""Data sources: read-only lookups of existing remote records."""

from prefect_tf.core.datasources.account import AccountDataSource
from prefect_tf.core.datasources.workspace import WorkspaceDataSource

__all__ = [
    "AccountDataSource",
    "WorkspaceDataSource",
]
