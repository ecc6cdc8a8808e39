"""
Tests for the lifecycle pipelines and the provider registry
"""

import json

import pytest

from prefect_tf.core.config import AppSettings
from prefect_tf.core.resources.deployment import DeploymentResource
from prefect_tf.core.resources.work_pool import WorkPoolResource
from prefect_tf.core.resources.workspace import WorkspaceResource
from prefect_tf.core.services import lifecycle
from prefect_tf.core.services.lifecycle import Action
from prefect_tf.core.services.provider import Provider, UnknownTypeError

from .conftest import ACCOUNT_ID, DEPLOYMENT_ID, FLOW_ID, SCOPE, WORKSPACE_ID, deployment_payload

DEPLOYMENT_PATH = f"{SCOPE}/deployments/{DEPLOYMENT_ID}"
CONFIG = {"name": "nightly", "flow_id": str(FLOW_ID), "tags": ["etl", "nightly"], "parameters": '{"limit": 10}'}
SETTLED = dict(CONFIG, parameters='{"dry_run": false, "limit": 10}')


@pytest.fixture
def resource(client):
    return DeploymentResource(client)


def _state_after_create(api, resource):
    api.add("POST", f"{SCOPE}/deployments/", status=201, body=deployment_payload())
    return lifecycle.apply(resource, CONFIG).state


class TestApply:
    def test_create(self, api, resource):
        api.add("POST", f"{SCOPE}/deployments/", status=201, body=deployment_payload())

        result = lifecycle.apply(resource, CONFIG)

        assert result.action is Action.CREATE
        assert result.ok
        assert result.state["id"] == str(DEPLOYMENT_ID)
        assert result.state["created"].startswith("2024-01-01T10:00:00")
        body = json.loads(api.last().content)
        assert body["paused"] is False
        assert body["enforce_parameter_schema"] is False

    def test_invalid_config_sends_nothing(self, api, resource):
        result = lifecycle.apply(resource, {"name": "nightly"})

        assert not result.ok
        assert result.state is None
        assert api.requests == []

    def test_no_changes(self, api, resource):
        state = _state_after_create(api, resource)
        config = SETTLED
        requests_before = len(api.requests)

        result = lifecycle.apply(resource, config, state)

        assert result.action is Action.NOOP
        assert result.state == state
        assert len(api.requests) == requests_before

    def test_update(self, api, resource):
        state = _state_after_create(api, resource)
        api.add("PATCH", DEPLOYMENT_PATH, status=204)
        api.add("GET", DEPLOYMENT_PATH, body=deployment_payload(paused=True))

        result = lifecycle.apply(resource, dict(CONFIG, paused=True), state)

        assert result.action is Action.UPDATE
        assert "paused" in result.changed
        assert result.state["paused"] is True
        assert result.state["id"] == str(DEPLOYMENT_ID)

    def test_failed_update_keeps_prior_state(self, api, resource):
        state = _state_after_create(api, resource)
        api.add("PATCH", DEPLOYMENT_PATH, status=500, body="boom")

        result = lifecycle.apply(resource, dict(CONFIG, paused=True), state)

        assert not result.ok
        assert result.state == state

    def test_rename_requires_replacement(self, api, resource):
        state = _state_after_create(api, resource)
        requests_before = len(api.requests)

        result = lifecycle.apply(resource, dict(SETTLED, name="renamed"), state)

        assert result.changed == ["name"]
        (error,) = result.diagnostics.errors()
        assert error.attribute == "name"
        assert error.summary == "Attribute requires replacement"
        assert result.state == state
        assert len(api.requests) == requests_before

    def test_new_flow_requires_replacement(self, api, resource):
        state = _state_after_create(api, resource)
        other_flow = "99999999-9999-9999-9999-999999999999"

        result = lifecycle.apply(resource, dict(CONFIG, flow_id=other_flow, paused=True), state)

        assert [d.attribute for d in result.diagnostics.errors()] == ["flow_id"]
        assert all(r.method != "PATCH" for r in api.requests)


class TestSettledState:
    """A second apply of an unchanged configuration sends nothing."""

    def test_workspace_with_provider_account(self, api, client):
        api.add(
            "POST",
            f"/api/accounts/{ACCOUNT_ID}/workspaces/",
            status=201,
            body={"id": str(WORKSPACE_ID), "account_id": str(ACCOUNT_ID), "name": "Prod", "handle": "prod"},
        )
        resource = WorkspaceResource(client)
        config = {"name": "Prod", "handle": "prod"}

        created = lifecycle.apply(resource, config)
        second = lifecycle.apply(resource, config, created.state)

        assert created.state["account_id"] == str(ACCOUNT_ID)
        assert second.action is Action.NOOP
        assert [r.method for r in api.requests] == ["POST"]

    def test_workspace_moved_to_another_account(self, api, client):
        state = {
            "id": str(WORKSPACE_ID),
            "account_id": str(ACCOUNT_ID),
            "name": "Prod",
            "handle": "prod",
            "description": None,
        }
        other_account = "99999999-9999-9999-9999-999999999999"

        result = lifecycle.apply(
            WorkspaceResource(client), {"name": "Prod", "handle": "prod", "account_id": other_account}, state
        )

        assert result.diagnostics.errors()[0].attribute == "account_id"
        assert api.requests == []

    def test_work_pool_type_change_requires_replacement(self, api, client):
        state = {"id": str(DEPLOYMENT_ID), "name": "k8s", "type": "kubernetes", "paused": False}

        result = lifecycle.apply(WorkPoolResource(client), {"name": "k8s", "type": "process"}, state)

        assert result.diagnostics.errors()[0].attribute == "type"
        assert api.requests == []


class TestRefreshDestroyImport:
    def test_refresh(self, api, resource):
        api.add("GET", DEPLOYMENT_PATH, body=deployment_payload(description="changed remotely"))

        result = lifecycle.refresh(resource, {"id": str(DEPLOYMENT_ID)})

        assert result.state["description"] == "changed remotely"

    def test_destroy(self, api, resource):
        api.add("DELETE", DEPLOYMENT_PATH, status=204)

        result = lifecycle.destroy(resource, {"id": str(DEPLOYMENT_ID)})

        assert result.ok
        assert result.state is None

    def test_import_runs_a_read(self, api, resource):
        other_scope = f"/api/accounts/{resource.client.default_account_id}/workspaces/{WORKSPACE_ID}"
        api.add("GET", f"{other_scope}/deployments/{DEPLOYMENT_ID}", body=deployment_payload())

        result = lifecycle.import_resource(resource, f"{DEPLOYMENT_ID},{WORKSPACE_ID}")

        assert result.action is Action.IMPORT
        assert result.state["name"] == "nightly"
        assert result.state["workspace_id"] == str(WORKSPACE_ID)

    def test_import_rejects_bad_identifier(self, api, resource):
        result = lifecycle.import_resource(resource, "a,b,c")

        assert result.state is None
        assert api.requests == []

    def test_unknown_attribute_in_state(self, resource):
        result = lifecycle.refresh(resource, {"id": str(DEPLOYMENT_ID), "bogus": 1})

        assert result.diagnostics.errors()[0].attribute == "bogus"


class TestProvider:
    def test_registry(self):
        provider = Provider(AppSettings(_env_file=None))

        assert "prefect_deployment" in provider.resource_types()
        assert provider.data_source_types() == ["prefect_account", "prefect_workspace"]

    def test_unknown_type(self):
        with pytest.raises(UnknownTypeError):
            Provider(AppSettings(_env_file=None)).resource("prefect_nope")

    def test_missing_key_warns_for_cloud(self):
        provider = Provider(AppSettings(_env_file=None))

        diags = provider.configure()
        provider.close()

        assert not diags.has_error()
        assert diags.items[0].summary == "Missing Prefect API key"

    def test_configured_resource_uses_transport(self, api, settings):
        api.add("GET", DEPLOYMENT_PATH, body=deployment_payload())
        provider = Provider(settings)
        provider.configure(transport=api.transport)

        resource = provider.resource("prefect_deployment")
        result = lifecycle.refresh(resource, {"id": str(DEPLOYMENT_ID)})
        provider.close()

        assert result.ok
