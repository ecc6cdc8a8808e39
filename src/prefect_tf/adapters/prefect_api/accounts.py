"""Prefect API client: accounts."""

from __future__ import annotations

from uuid import UUID

from prefect_tf.adapters.prefect_api.base import NO_CONTENT, OK, ResourceClient
from prefect_tf.core.domain.models import AccountResponse, AccountUpdate


class AccountsClient(ResourceClient):
    """Client for working with accounts (`<api>/accounts`)."""

    def get(self, account_id: UUID) -> AccountResponse:
        """Return details for an account by ID."""

        resp = self._send("GET", self._url(account_id), expected=OK)
        return self._decode(resp, AccountResponse)

    def update(self, account_id: UUID, data: AccountUpdate) -> None:
        """Modify an existing account by ID."""

        self._send("PATCH", self._url(account_id), payload=data, expected=NO_CONTENT)

    def delete(self, account_id: UUID) -> None:
        """Remove an account by ID."""

        self._send("DELETE", self._url(account_id), expected=NO_CONTENT)
