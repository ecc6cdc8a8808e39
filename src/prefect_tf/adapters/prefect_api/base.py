"""Request/response plumbing shared by the per-resource clients.

Each public client method issues exactly one HTTP request. Failures map to
one exception from `prefect_tf.core.errors`; nothing is retried.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter
from pydantic_core import PydanticSerializationError

from prefect_tf.core.errors import DecodeError, EncodeError, RequestError, StatusCodeError, TransportError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

OK = frozenset({200})
CREATED = frozenset({200, 201})
NO_CONTENT = frozenset({200, 204})


def encode_payload(payload: BaseModel | dict[str, Any]) -> bytes:
    """Serialize a request body, dropping unset (`None`) attributes."""

    try:
        if isinstance(payload, BaseModel):
            data = payload.model_dump(mode="json", exclude_none=True, by_alias=True)
        else:
            data = payload
        return json.dumps(data, allow_nan=False).encode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise EncodeError(str(exc)) from exc


class ResourceClient:
    """Base for a client bound to one collection URL, e.g. `.../deployments`."""

    def __init__(self, http: httpx.Client, base_url: str) -> None:
        self._http = http
        self._base_url = base_url

    def _url(self, *parts: object) -> str:
        if not parts:
            return f"{self._base_url}/"
        return "/".join([self._base_url, *(str(p) for p in parts)])

    def _send(
        self,
        method: str,
        url: str,
        *,
        payload: BaseModel | dict[str, Any] | None = None,
        expected: Iterable[int] = OK,
    ) -> httpx.Response:
        content = encode_payload(payload) if payload is not None else None

        try:
            request = self._http.build_request(method, url, content=content)
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            raise RequestError(str(exc)) from exc

        try:
            resp = self._http.send(request)
        except httpx.HTTPError as exc:
            logger.debug("%s %s failed: %s", method, url, exc)
            raise TransportError(str(exc)) from exc

        logger.debug("%s %s -> %s", method, url, resp.status_code)
        if resp.status_code not in set(expected):
            raise StatusCodeError(resp.status_code, resp.reason_phrase, resp.text.strip())
        return resp

    @staticmethod
    def _decode(resp: httpx.Response, model: type[ModelT]) -> ModelT:
        try:
            return model.model_validate(resp.json())
        except ValueError as exc:
            raise DecodeError(str(exc)) from exc

    @staticmethod
    def _decode_list(resp: httpx.Response, model: type[ModelT]) -> list[ModelT]:
        try:
            return TypeAdapter(list[model]).validate_python(resp.json())  # type: ignore[valid-type]
        except ValueError as exc:
            raise DecodeError(str(exc)) from exc
