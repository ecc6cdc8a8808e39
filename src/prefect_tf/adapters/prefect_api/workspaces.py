"""Prefect API client: workspaces (account scoped)."""

from __future__ import annotations

from typing import Any, Sequence
from uuid import UUID

from prefect_tf.adapters.prefect_api.base import CREATED, NO_CONTENT, OK, ResourceClient
from prefect_tf.core.domain.models import Workspace, WorkspaceCreate, WorkspaceUpdate


class WorkspacesClient(ResourceClient):
    """Client for `<api>/accounts/<account_id>/workspaces`."""

    def create(self, data: WorkspaceCreate) -> Workspace:
        resp = self._send("POST", self._url(), payload=data, expected=CREATED)
        return self._decode(resp, Workspace)

    def list(self, handles: Sequence[str] = ()) -> list[Workspace]:
        """Return workspaces, optionally restricted to the given handles."""

        body: dict[str, Any] = {}
        if handles:
            body = {"workspaces": {"handle": {"any_": list(handles)}}}
        resp = self._send("POST", self._url("filter"), payload=body, expected=OK)
        return self._decode_list(resp, Workspace)

    def get(self, workspace_id: UUID) -> Workspace:
        resp = self._send("GET", self._url(workspace_id), expected=OK)
        return self._decode(resp, Workspace)

    def update(self, workspace_id: UUID, data: WorkspaceUpdate) -> None:
        self._send("PATCH", self._url(workspace_id), payload=data, expected=NO_CONTENT)

    def delete(self, workspace_id: UUID) -> None:
        self._send("DELETE", self._url(workspace_id), expected=NO_CONTENT)
