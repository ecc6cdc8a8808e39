"""The `prefect` provider: configuration plus the registry of types.

The provider builds one `PrefectClient` from `AppSettings` and hands it to
every resource and data source through `configure()`.
"""

from __future__ import annotations

import logging

import httpx

from prefect_tf.adapters.prefect_api import PrefectClient
from prefect_tf.core.config import AppSettings
from prefect_tf.core.datasources import AccountDataSource, WorkspaceDataSource
from prefect_tf.core.domain.diagnostics import Diagnostics
from prefect_tf.core.resources import (
    AccountResource,
    DataSource,
    DeploymentResource,
    FlowResource,
    Resource,
    VariableResource,
    WorkPoolResource,
    WorkspaceResource,
)

logger = logging.getLogger(__name__)

PROVIDER_TYPE_NAME = "prefect"

_RESOURCES: tuple[type[Resource], ...] = (
    AccountResource,
    DeploymentResource,
    FlowResource,
    VariableResource,
    WorkPoolResource,
    WorkspaceResource,
)

_DATA_SOURCES: tuple[type[DataSource], ...] = (
    AccountDataSource,
    WorkspaceDataSource,
)


class UnknownTypeError(LookupError):
    """Raised when a resource/data-source type name is not registered."""


class Provider:
    type_name = PROVIDER_TYPE_NAME

    def __init__(self, settings: AppSettings | None = None) -> None:
        self.settings = settings or AppSettings()
        self.client: PrefectClient | None = None

    def configure(self, *, transport: httpx.BaseTransport | None = None) -> Diagnostics:
        """Build the API client. A missing API key against Prefect Cloud is a warning."""

        diags = Diagnostics()
        if self.settings.api_key is None and "api.prefect.cloud" in self.settings.api_url:
            diags.add_warning(
                "Missing Prefect API key",
                "PREFECT_API_KEY is not set; Prefect Cloud will reject unauthenticated requests.",
            )
        self.client = PrefectClient(self.settings, transport=transport)
        logger.info("Configured provider for %s", self.settings.api_url)
        return diags

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            self.client = None

    def resource_types(self) -> list[str]:
        return sorted(cls().type_name(self.type_name) for cls in _RESOURCES)

    def data_source_types(self) -> list[str]:
        return sorted(cls().type_name(self.type_name) for cls in _DATA_SOURCES)

    def resource(self, type_name: str) -> Resource:
        for cls in _RESOURCES:
            instance = cls()
            if instance.type_name(self.type_name) == type_name:
                instance.configure(self.client)
                return instance
        raise UnknownTypeError(f"unknown resource type {type_name!r}")

    def data_source(self, type_name: str) -> DataSource:
        for cls in _DATA_SOURCES:
            instance = cls()
            if instance.type_name(self.type_name) == type_name:
                instance.configure(self.client)
                return instance
        raise UnknownTypeError(f"unknown data source type {type_name!r}")
