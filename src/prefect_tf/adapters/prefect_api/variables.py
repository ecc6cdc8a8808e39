"""Prefect API client: variables (workspace scoped)."""

from __future__ import annotations

from urllib.parse import quote
from uuid import UUID

from prefect_tf.adapters.prefect_api.base import CREATED, NO_CONTENT, OK, ResourceClient
from prefect_tf.core.domain.models import Variable, VariableCreate, VariableUpdate


class VariablesClient(ResourceClient):
    """Client for `.../variables`."""

    def create(self, data: VariableCreate) -> Variable:
        resp = self._send("POST", self._url(), payload=data, expected=CREATED)
        return self._decode(resp, Variable)

    def get(self, variable_id: UUID) -> Variable:
        resp = self._send("GET", self._url(variable_id), expected=OK)
        return self._decode(resp, Variable)

    def get_by_name(self, name: str) -> Variable:
        resp = self._send("GET", self._url("name", quote(name, safe="")), expected=OK)
        return self._decode(resp, Variable)

    def update(self, variable_id: UUID, data: VariableUpdate) -> None:
        self._send("PATCH", self._url(variable_id), payload=data, expected=NO_CONTENT)

    def delete(self, variable_id: UUID) -> None:
        self._send("DELETE", self._url(variable_id), expected=NO_CONTENT)
