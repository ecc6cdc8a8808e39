"""
Tests for the deployment resource (Create / Read / Update / Delete / Import)
"""

import json

import pytest

from prefect_tf.adapters.prefect_api import PrefectClient
from prefect_tf.core.config import AppSettings
from prefect_tf.core.resources.deployment import DeploymentResource, DeploymentResourceModel

from .conftest import ACCOUNT_ID, API_URL, DEPLOYMENT_ID, FLOW_ID, SCOPE, WORKSPACE_ID, deployment_payload

DEPLOYMENT_PATH = f"{SCOPE}/deployments/{DEPLOYMENT_ID}"


@pytest.fixture
def resource(client):
    res = DeploymentResource()
    assert not res.configure(client).has_error()
    return res


def _plan(**overrides):
    values = {"name": "nightly", "flow_id": str(FLOW_ID), "tags": ["etl", "nightly"]}
    values.update(overrides)
    return DeploymentResourceModel(**values)


class TestCreate:
    def test_create_copies_the_server_record(self, api, resource):
        api.add("POST", f"{SCOPE}/deployments/", status=201, body=deployment_payload())

        result = resource.create(_plan(parameters='{"limit": 10}'))

        assert result.ok
        state = result.state
        assert state.id == str(DEPLOYMENT_ID)
        assert state.work_queue_name == "default"
        assert state.paused is False
        # parameters are re-serialized from the server's answer
        assert json.loads(state.parameters) == {"limit": 10, "dry_run": False}
        assert json.loads(api.last().content)["parameters"] == {"limit": 10}

    def test_unset_parameters_are_not_sent(self, api, resource):
        api.add("POST", f"{SCOPE}/deployments/", status=201, body=deployment_payload(parameters={}))

        result = resource.create(_plan())

        assert result.ok
        assert "parameters" not in json.loads(api.last().content)
        assert result.state.parameters == "{}"

    def test_invalid_parameters_json(self, api, resource):
        result = resource.create(_plan(parameters="{not json"))

        assert result.state is None
        (error,) = result.diagnostics.errors()
        assert error.attribute == "parameters"
        assert error.summary == "Normalized JSON Unmarshal Error"
        assert api.requests == []

    def test_null_parameters_are_left_to_the_server(self, api, resource):
        api.add("POST", f"{SCOPE}/deployments/", status=201, body=deployment_payload(parameters={}))

        result = resource.create(_plan(parameters="null"))

        assert result.ok
        assert "parameters" not in json.loads(api.last().content)

    def test_parameters_must_be_an_object(self, resource):
        result = resource.create(_plan(parameters="[1, 2]"))

        assert result.diagnostics.errors()[0].attribute == "parameters"

    def test_api_error_becomes_a_diagnostic(self, api, resource):
        api.add("POST", f"{SCOPE}/deployments/", status=500, body="boom")

        result = resource.create(_plan())

        assert result.state is None
        (error,) = result.diagnostics.errors()
        assert error.summary == "Error creating deployment"
        assert error.detail == (
            "Could not create deployment, unexpected error: status code 500 Internal Server Error, error=boom"
        )

    def test_missing_name(self, api, resource):
        result = resource.create(DeploymentResourceModel(flow_id=str(FLOW_ID)))

        assert result.diagnostics.errors()[0].attribute == "name"
        assert api.requests == []

    def test_bad_scope_reports_client_error(self, api):
        settings = AppSettings(_env_file=None, api_url=API_URL, cloud_account_id=ACCOUNT_ID)
        with PrefectClient(settings, transport=api.transport) as client:
            res = DeploymentResource(client)
            result = res.create(_plan())

        (error,) = result.diagnostics.errors()
        assert error.summary == "Error creating deployment client"
        assert api.requests == []


class TestRead:
    def test_read_refreshes_every_attribute(self, api, resource):
        api.add("GET", DEPLOYMENT_PATH, body=deployment_payload(paused=True, version="2.0.0"))

        result = resource.read(DeploymentResourceModel(id=str(DEPLOYMENT_ID)))

        assert result.ok
        assert result.state.paused is True
        assert result.state.version == "2.0.0"
        assert str(result.state.flow_id) == str(FLOW_ID)

    def test_read_not_found(self, resource):
        result = resource.read(DeploymentResourceModel(id=str(DEPLOYMENT_ID)))

        assert result.state is None
        (error,) = result.diagnostics.errors()
        assert error.summary == "Error refreshing deployment state"
        assert "status code 404" in error.detail

    def test_read_with_invalid_id(self, api, resource):
        result = resource.read(DeploymentResourceModel(id="not-a-uuid"))

        (error,) = result.diagnostics.errors()
        assert error.attribute == "id"
        assert error.summary == "Error parsing Deployment ID"
        assert api.requests == []


class TestUpdate:
    def test_update_patches_then_reads(self, api, resource):
        api.add("PATCH", DEPLOYMENT_PATH, status=204)
        api.add("GET", DEPLOYMENT_PATH, body=deployment_payload(paused=True))

        result = resource.update(_plan(id=str(DEPLOYMENT_ID), paused=True))

        assert result.ok
        assert result.state.paused is True
        patch = next(r for r in api.requests if r.method == "PATCH")
        body = json.loads(patch.content)
        assert body["paused"] is True
        assert "name" not in body
        assert "flow_id" not in body

    def test_update_uses_prior_state_id(self, api, resource):
        api.add("PATCH", DEPLOYMENT_PATH, status=204)
        api.add("GET", DEPLOYMENT_PATH, body=deployment_payload())

        result = resource.update(_plan(), DeploymentResourceModel(id=str(DEPLOYMENT_ID)))

        assert result.ok
        assert result.state.id == str(DEPLOYMENT_ID)

    def test_update_failure(self, api, resource):
        api.add("PATCH", DEPLOYMENT_PATH, status=422, body={"detail": "invalid"})

        result = resource.update(_plan(id=str(DEPLOYMENT_ID)))

        assert result.diagnostics.errors()[0].summary == "Error updating deployment"

    def test_refresh_failure_after_update(self, api, resource):
        api.add("PATCH", DEPLOYMENT_PATH, status=204)

        result = resource.update(_plan(id=str(DEPLOYMENT_ID)))

        assert result.state is None
        assert result.diagnostics.errors()[0].summary == "Error refreshing Deployment state"


class TestDelete:
    def test_delete_drops_state(self, api, resource):
        api.add("DELETE", DEPLOYMENT_PATH, status=204)

        result = resource.delete(DeploymentResourceModel(id=str(DEPLOYMENT_ID)))

        assert result.ok
        assert result.state is None

    def test_failed_delete_keeps_state(self, api, resource):
        api.add("DELETE", DEPLOYMENT_PATH, status=500, body="boom")
        state = DeploymentResourceModel(id=str(DEPLOYMENT_ID), name="nightly")

        result = resource.delete(state)

        assert result.state is state
        assert result.diagnostics.errors()[0].summary == "Error deleting Deployment"


class TestImport:
    def test_import_with_workspace(self, resource):
        result = resource.import_state(f"{DEPLOYMENT_ID},{WORKSPACE_ID}")

        assert result.ok
        assert result.state.id == str(DEPLOYMENT_ID)
        assert result.state.workspace_id == WORKSPACE_ID

    def test_import_id_only(self, resource):
        result = resource.import_state(str(DEPLOYMENT_ID))

        assert result.state.workspace_id is None

    @pytest.mark.parametrize("raw", ["a,b,c", ",x", "x,", f"{DEPLOYMENT_ID},nope"])
    def test_import_rejects_malformed_identifiers(self, resource, raw):
        result = resource.import_state(raw)

        assert result.state is None
        assert result.diagnostics.has_error()
