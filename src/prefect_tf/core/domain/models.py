"""Prefect API payload models (Pydantic v2).

Why Pydantic here:
- Response bodies are validated on decode: a shape mismatch is a decode error,
  not a silently half-filled record.
- Request payloads are dumped with `exclude_none`, so unset optional
  attributes are simply not sent.

Note:
- These models describe *what* the API exchanges, not *how* it is called.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class APIModel(BaseModel):
    """Common config: tolerate unknown response keys, allow field names or aliases."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class BaseRecord(APIModel):
    """Fields shared by every server-side record."""

    id: UUID = Field(..., description="Unique identifier of the record.")
    created: datetime | None = Field(default=None, description="Creation timestamp.")
    updated: datetime | None = Field(default=None, description="Last update timestamp.")


# ---- Accounts ----


class AccountResponse(BaseRecord):
    name: str = Field(..., description="Account name.")
    handle: str = Field(..., description="Unique, URL-friendly account handle.")
    location: str | None = None
    link: str | None = None
    image_location: str | None = None
    billing_email: str | None = None
    allow_public_workspaces: bool | None = None


class AccountUpdate(APIModel):
    name: str | None = None
    handle: str | None = None
    location: str | None = None
    link: str | None = None
    billing_email: str | None = None
    allow_public_workspaces: bool | None = None


# ---- Workspaces ----


class Workspace(BaseRecord):
    account_id: UUID | None = None
    name: str
    handle: str
    description: str | None = None


class WorkspaceCreate(APIModel):
    name: str
    handle: str
    description: str | None = None


class WorkspaceUpdate(APIModel):
    name: str | None = None
    handle: str | None = None
    description: str | None = None


# ---- Flows ----


class Flow(BaseRecord):
    name: str
    tags: list[str] = Field(default_factory=list)


class FlowCreate(APIModel):
    name: str
    tags: list[str] = Field(default_factory=list)


class FlowUpdate(APIModel):
    tags: list[str] | None = None


# ---- Deployments ----


class Deployment(BaseRecord):
    """A server-side record describing how, when and where a flow runs."""

    name: str
    flow_id: UUID
    description: str | None = None
    enforce_parameter_schema: bool = False
    entrypoint: str | None = None
    manifest_path: str | None = None
    parameters: dict[str, Any] = Field(default_factory=dict)
    path: str | None = None
    paused: bool = False
    tags: list[str] = Field(default_factory=list)
    version: str | None = None
    work_pool_name: str | None = None
    work_queue_name: str | None = None


class DeploymentCreate(APIModel):
    name: str
    flow_id: UUID
    description: str | None = None
    enforce_parameter_schema: bool | None = None
    entrypoint: str | None = None
    manifest_path: str | None = None
    parameters: dict[str, Any] | None = None
    path: str | None = None
    paused: bool | None = None
    tags: list[str] | None = None
    version: str | None = None
    work_pool_name: str | None = None
    work_queue_name: str | None = None


class DeploymentUpdate(APIModel):
    """PATCH body. The flow and the name of a deployment are immutable."""

    description: str | None = None
    enforce_parameter_schema: bool | None = None
    entrypoint: str | None = None
    manifest_path: str | None = None
    parameters: dict[str, Any] | None = None
    path: str | None = None
    paused: bool | None = None
    tags: list[str] | None = None
    version: str | None = None
    work_pool_name: str | None = None
    work_queue_name: str | None = None


# ---- Work pools ----


class WorkPool(BaseRecord):
    name: str
    description: str | None = None
    type: str | None = None
    paused: bool = Field(default=False, alias="is_paused")
    concurrency_limit: int | None = None
    default_queue_id: UUID | None = None
    base_job_template: dict[str, Any] = Field(default_factory=dict)


class WorkPoolCreate(APIModel):
    name: str
    description: str | None = None
    type: str | None = None
    paused: bool | None = Field(default=None, alias="is_paused")
    concurrency_limit: int | None = None
    base_job_template: dict[str, Any] | None = None


class WorkPoolUpdate(APIModel):
    description: str | None = None
    paused: bool | None = Field(default=None, alias="is_paused")
    concurrency_limit: int | None = None
    base_job_template: dict[str, Any] | None = None


# ---- Variables ----


class Variable(BaseRecord):
    name: str
    value: str
    tags: list[str] = Field(default_factory=list)


class VariableCreate(APIModel):
    name: str
    value: str
    tags: list[str] | None = None


class VariableUpdate(APIModel):
    name: str | None = None
    value: str | None = None
    tags: list[str] | None = None
