"""Base classes for resources and data sources.

Why plain objects instead of a plugin SDK:
- Every lifecycle operation takes a model (plan or state) and returns an
  `OperationResult`: the new state plus diagnostics. Nothing raises for API
  failures, so callers (CLI, tests) handle every outcome the same way.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Generic, Mapping, TypeVar
from uuid import UUID

from pydantic import BaseModel, ValidationError
from pydantic.config import ConfigDict

from prefect_tf.core.domain.diagnostics import Diagnostics
from prefect_tf.core.errors import PrefectAPIError
from prefect_tf.core.helpers import create_client_error_diagnostic, parse_import_identifier, parse_uuid
from prefect_tf.core.interfaces.client import PrefectClient
from prefect_tf.core.schema import Schema

ClientT = TypeVar("ClientT")

logger = logging.getLogger(__name__)


class StateModel(BaseModel):
    """Plan/state of one resource instance. Every attribute may be null."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    def to_state(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


ModelT = TypeVar("ModelT", bound=StateModel)


@dataclass
class OperationResult(Generic[ModelT]):
    state: ModelT | None = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def ok(self) -> bool:
        return not self.diagnostics.has_error()


def load_model(model: type[ModelT], data: Mapping[str, Any]) -> tuple[ModelT | None, Diagnostics]:
    """Validate raw plan/state data into `model`, turning errors into diagnostics."""

    diags = Diagnostics()
    try:
        return model.model_validate(dict(data)), diags
    except ValidationError as exc:
        for err in exc.errors():
            attribute = ".".join(str(p) for p in err["loc"]) or None
            if attribute:
                diags.add_attribute_error(attribute, "Invalid attribute value", err["msg"])
            else:
                diags.add_error("Invalid attribute value", err["msg"])
        return None, diags


class _Configurable:
    """Holds the `PrefectClient` handed over by the provider."""

    kind: ClassVar[str] = "Resource"
    name: ClassVar[str]
    display_name: ClassVar[str]

    def __init__(self, client: PrefectClient | None = None) -> None:
        self.client = client

    def type_name(self, provider_type_name: str) -> str:
        return f"{provider_type_name}_{self.name}"

    def configure(self, provider_data: object) -> Diagnostics:
        diags = Diagnostics()
        if provider_data is None:
            return diags
        if not isinstance(provider_data, PrefectClient):
            diags.add_error(
                f"Unexpected {self.kind} Configure Type",
                f"Expected PrefectClient, got: {type(provider_data).__name__}. "
                "Please report this issue to the provider developers.",
            )
            return diags
        self.client = provider_data
        return diags

    def _client(self) -> PrefectClient:
        if self.client is None:
            raise RuntimeError(f"{self.display_name} {self.kind.lower()} used before configure()")
        return self.client

    def _api(self, diags: Diagnostics, factory: Callable[..., ClientT], *ids: UUID | None) -> ClientT | None:
        """Build a per-resource client, reporting scope errors as diagnostics."""

        try:
            return factory(*ids)
        except PrefectAPIError as exc:
            diags.append(create_client_error_diagnostic(self.display_name.lower(), exc))
            return None

    @staticmethod
    def _require(model: StateModel, names: tuple[str, ...], diags: Diagnostics) -> bool:
        for name in names:
            if getattr(model, name) is None:
                diags.add_attribute_error(name, "Missing required argument", f"The argument {name!r} is required.")
        return not diags.has_error()


class Resource(_Configurable, ABC, Generic[ModelT]):
    """A managed resource: Create / Read / Update / Delete / Import."""

    model: ClassVar[type[StateModel]]

    @abstractmethod
    def schema(self) -> Schema: ...

    @abstractmethod
    def create(self, plan: ModelT) -> OperationResult[ModelT]: ...

    @abstractmethod
    def read(self, state: ModelT) -> OperationResult[ModelT]: ...

    @abstractmethod
    def update(self, plan: ModelT, state: ModelT | None = None) -> OperationResult[ModelT]: ...

    @abstractmethod
    def delete(self, state: ModelT) -> OperationResult[ModelT]: ...

    def import_state(self, identifier: str) -> OperationResult[ModelT]:
        """Seed a state from `id` or `id,workspace_id`; a Read fills in the rest."""

        result: OperationResult[ModelT] = OperationResult()
        parsed = parse_import_identifier(identifier, self.display_name, result.diagnostics)
        if parsed is None:
            return result

        values: dict[str, Any] = {"id": parsed.identifier}
        if parsed.workspace_id is not None:
            values["workspace_id"] = str(parsed.workspace_id)
        state, diags = load_model(self.model, values)
        result.diagnostics.extend(diags)
        result.state = state  # type: ignore[assignment]
        logger.info("Imported %s %s", self.display_name, parsed.identifier)
        return result

    def _parse_id(self, value: str | None, diags: Diagnostics) -> UUID | None:
        try:
            return parse_uuid(value or "")
        except ValueError as exc:
            diags.add_attribute_error(
                "id",
                f"Error parsing {self.display_name} ID",
                f"Could not parse {self.display_name.lower()} ID to UUID, unexpected error: {exc}",
            )
            return None


class DataSource(_Configurable, ABC, Generic[ModelT]):
    """A read-only lookup of an existing remote record."""

    kind: ClassVar[str] = "Data Source"
    model: ClassVar[type[StateModel]]

    @abstractmethod
    def schema(self) -> Schema: ...

    @abstractmethod
    def read(self, config: ModelT) -> OperationResult[ModelT]: ...


__all__ = [
    "DataSource",
    "OperationResult",
    "Resource",
    "StateModel",
    "load_model",
]
