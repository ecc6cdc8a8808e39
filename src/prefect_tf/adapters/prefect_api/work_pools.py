"""Prefect API client: work pools (workspace scoped, addressed by name)."""

from __future__ import annotations

from typing import Any, Sequence
from urllib.parse import quote

from prefect_tf.adapters.prefect_api.base import CREATED, NO_CONTENT, OK, ResourceClient
from prefect_tf.core.domain.models import WorkPool, WorkPoolCreate, WorkPoolUpdate


class WorkPoolsClient(ResourceClient):
    """Client for `.../work_pools`."""

    def create(self, data: WorkPoolCreate) -> WorkPool:
        resp = self._send("POST", self._url(), payload=data, expected=CREATED)
        return self._decode(resp, WorkPool)

    def list(self, names: Sequence[str] = ()) -> list[WorkPool]:
        body: dict[str, Any] = {}
        if names:
            body = {"work_pools": {"name": {"any_": list(names)}}}
        resp = self._send("POST", self._url("filter"), payload=body, expected=OK)
        return self._decode_list(resp, WorkPool)

    def get(self, name: str) -> WorkPool:
        resp = self._send("GET", self._url(quote(name, safe="")), expected=OK)
        return self._decode(resp, WorkPool)

    def update(self, name: str, data: WorkPoolUpdate) -> None:
        self._send("PATCH", self._url(quote(name, safe="")), payload=data, expected=NO_CONTENT)

    def delete(self, name: str) -> None:
        self._send("DELETE", self._url(quote(name, safe="")), expected=NO_CONTENT)
