"""Prefect API client: deployments (workspace scoped)."""

from __future__ import annotations

from uuid import UUID

from prefect_tf.adapters.prefect_api.base import CREATED, NO_CONTENT, OK, ResourceClient
from prefect_tf.core.domain.models import Deployment, DeploymentCreate, DeploymentUpdate


class DeploymentsClient(ResourceClient):
    """Client for `.../deployments`."""

    def create(self, data: DeploymentCreate) -> Deployment:
        """Create a deployment and return the server-side record."""

        resp = self._send("POST", self._url(), payload=data, expected=CREATED)
        return self._decode(resp, Deployment)

    def get(self, deployment_id: UUID) -> Deployment:
        resp = self._send("GET", self._url(deployment_id), expected=OK)
        return self._decode(resp, Deployment)

    def update(self, deployment_id: UUID, data: DeploymentUpdate) -> None:
        """PATCH a deployment. The API answers 204 without a body."""

        self._send("PATCH", self._url(deployment_id), payload=data, expected=NO_CONTENT)

    def delete(self, deployment_id: UUID) -> None:
        self._send("DELETE", self._url(deployment_id), expected=NO_CONTENT)
