"""Prefect API client: flows (workspace scoped)."""

from __future__ import annotations

from uuid import UUID

from prefect_tf.adapters.prefect_api.base import CREATED, NO_CONTENT, OK, ResourceClient
from prefect_tf.core.domain.models import Flow, FlowCreate, FlowUpdate


class FlowsClient(ResourceClient):
    """Client for `.../flows`.

    Note: creating a flow whose name already exists returns the existing
    record (HTTP 200) instead of failing.
    """

    def create(self, data: FlowCreate) -> Flow:
        resp = self._send("POST", self._url(), payload=data, expected=CREATED)
        return self._decode(resp, Flow)

    def get(self, flow_id: UUID) -> Flow:
        resp = self._send("GET", self._url(flow_id), expected=OK)
        return self._decode(resp, Flow)

    def update(self, flow_id: UUID, data: FlowUpdate) -> None:
        self._send("PATCH", self._url(flow_id), payload=data, expected=NO_CONTENT)

    def delete(self, flow_id: UUID) -> None:
        self._send("DELETE", self._url(flow_id), expected=NO_CONTENT)
