"""
Test configuration and fixtures
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

import httpx
import pytest

from prefect_tf.adapters.prefect_api import PrefectClient
from prefect_tf.core.config import AppSettings

API_URL = "https://api.test/api"
ACCOUNT_ID = UUID("11111111-1111-1111-1111-111111111111")
WORKSPACE_ID = UUID("22222222-2222-2222-2222-222222222222")
FLOW_ID = UUID("33333333-3333-3333-3333-333333333333")
DEPLOYMENT_ID = UUID("44444444-4444-4444-4444-444444444444")

SCOPE = f"/api/accounts/{ACCOUNT_ID}/workspaces/{WORKSPACE_ID}"


class FakePrefectAPI:
    """Route table served through `httpx.MockTransport`.

    Unknown routes answer 404 so a wrong URL shows up as a status error.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method, path)] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        status, body = route
        if body is None:
            return httpx.Response(status)
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's PREFECT_* variables out of the tests"""
    for key in (
        "PREFECT_API_URL",
        "PREFECT_API_KEY",
        "PREFECT_CLOUD_ACCOUNT_ID",
        "PREFECT_CLOUD_WORKSPACE_ID",
        "PREFECT_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings():
    return AppSettings(
        _env_file=None,
        api_url=API_URL,
        api_key="secret-key",
        cloud_account_id=ACCOUNT_ID,
        cloud_workspace_id=WORKSPACE_ID,
    )


@pytest.fixture
def api():
    return FakePrefectAPI()


@pytest.fixture
def client(settings, api):
    with PrefectClient(settings, transport=api.transport) as prefect:
        yield prefect


def deployment_payload(**overrides: Any) -> dict[str, Any]:
    data = {
        "id": str(DEPLOYMENT_ID),
        "created": "2024-01-01T10:00:00Z",
        "updated": "2024-01-02T10:00:00Z",
        "name": "nightly",
        "flow_id": str(FLOW_ID),
        "description": "Nightly ETL",
        "enforce_parameter_schema": False,
        "entrypoint": "flows/etl.py:etl",
        "manifest_path": None,
        "parameters": {"limit": 10, "dry_run": False},
        "path": "/opt/flows",
        "paused": False,
        "tags": ["etl", "nightly"],
        "version": "1.0.0",
        "work_pool_name": "k8s",
        "work_queue_name": "default",
    }
    data.update(overrides)
    return data
