"""httpx wrapper shared by every Prefect API client.

Why a wrapper:
- Standardises timeouts, headers and the user agent in one place.
- Makes testing easy: a `transport` (e.g. `httpx.MockTransport`) can be injected.
"""

from __future__ import annotations

from uuid import UUID

import httpx

from prefect_tf.core.config import AppSettings


def default_headers(api_key: str | None) -> dict[str, str]:
    """Headers sent with every API call.

    The `Authorization` header is only present when an API key is configured,
    so self-hosted servers without auth keep working.
    """

    headers = {"Content-Type": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    return headers


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an `httpx.Client` with safe defaults.

    Why a builder:
    - Centralises timeouts/headers so every resource client behaves the same.
    - Keeps the transport swappable for tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    headers.update(default_headers(settings.api_key_value()))
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def account_scoped_url(endpoint: str, account_id: UUID, resource: str) -> str:
    return f"{endpoint}/accounts/{account_id}/{resource}"


def workspace_scoped_url(
    endpoint: str,
    account_id: UUID | None,
    workspace_id: UUID | None,
    resource: str,
) -> str:
    """URL of a workspace-scoped collection.

    Prefect Cloud nests resources under an account and a workspace; a
    self-hosted server exposes them at the root of the API.
    """

    if account_id is not None and workspace_id is not None:
        return f"{endpoint}/accounts/{account_id}/workspaces/{workspace_id}/{resource}"
    return f"{endpoint}/{resource}"
