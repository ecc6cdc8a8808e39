"""
Tests for the Prefect API clients (httpx over a mock transport)
"""

import json
from uuid import UUID

import httpx
import pytest

from prefect_tf.adapters.prefect_api import PrefectClient
from prefect_tf.core.config import AppSettings
from prefect_tf.core.domain.models import (
    AccountUpdate,
    DeploymentCreate,
    DeploymentUpdate,
    VariableCreate,
    WorkPoolCreate,
)
from prefect_tf.core.errors import (
    ClientConfigurationError,
    DecodeError,
    EncodeError,
    StatusCodeError,
    TransportError,
)

from .conftest import ACCOUNT_ID, API_URL, DEPLOYMENT_ID, FLOW_ID, SCOPE, WORKSPACE_ID, deployment_payload


class TestAccountsClient:
    """Accounts: GET/PATCH/DELETE on /accounts/{id}"""

    def test_get_decodes_account(self, api, client):
        api.add(
            "GET",
            f"/api/accounts/{ACCOUNT_ID}",
            body={"id": str(ACCOUNT_ID), "name": "Acme", "handle": "acme", "link": None, "unknown": 1},
        )

        account = client.accounts().get(ACCOUNT_ID)

        assert account.id == ACCOUNT_ID
        assert account.handle == "acme"
        request = api.last()
        assert request.headers["Authorization"] == "Bearer secret-key"
        assert request.headers["Content-Type"] == "application/json"

    def test_get_non_200_raises_status_error(self, api, client):
        api.add("GET", f"/api/accounts/{ACCOUNT_ID}", status=403, body={"detail": "Forbidden"})

        with pytest.raises(StatusCodeError) as exc_info:
            client.accounts().get(ACCOUNT_ID)

        assert exc_info.value.status_code == 403
        assert str(exc_info.value).startswith("status code 403 Forbidden")

    def test_get_invalid_json_raises_decode_error(self, api, client):
        api.add("GET", f"/api/accounts/{ACCOUNT_ID}", body="not json")

        with pytest.raises(DecodeError, match="failed to decode response"):
            client.accounts().get(ACCOUNT_ID)

    def test_get_wrong_shape_raises_decode_error(self, api, client):
        api.add("GET", f"/api/accounts/{ACCOUNT_ID}", body={"id": "not-a-uuid"})

        with pytest.raises(DecodeError):
            client.accounts().get(ACCOUNT_ID)

    def test_update_sends_only_set_fields(self, api, client):
        api.add("PATCH", f"/api/accounts/{ACCOUNT_ID}", status=204)

        client.accounts().update(ACCOUNT_ID, AccountUpdate(name="Acme Corp"))

        assert json.loads(api.last().content) == {"name": "Acme Corp"}

    @pytest.mark.parametrize("status", [200, 204])
    def test_delete_accepts_ok_and_no_content(self, api, client, status):
        api.add("DELETE", f"/api/accounts/{ACCOUNT_ID}", status=status)

        client.accounts().delete(ACCOUNT_ID)

        assert api.last().method == "DELETE"

    def test_delete_unexpected_status(self, api, client):
        api.add("DELETE", f"/api/accounts/{ACCOUNT_ID}", status=500, body="boom")

        with pytest.raises(StatusCodeError, match="error=boom"):
            client.accounts().delete(ACCOUNT_ID)


class TestTransportFailures:
    def test_connect_error_becomes_transport_error(self, settings):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with PrefectClient(settings, transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(TransportError, match="http error: connection refused"):
                client.accounts().get(ACCOUNT_ID)


class TestDeploymentsClient:
    def test_create_posts_to_workspace_scope(self, api, client):
        api.add("POST", f"{SCOPE}/deployments/", status=201, body=deployment_payload())

        deployment = client.deployments().create(
            DeploymentCreate(name="nightly", flow_id=FLOW_ID, tags=["etl"], parameters={"limit": 10})
        )

        assert deployment.id == DEPLOYMENT_ID
        assert deployment.parameters == {"limit": 10, "dry_run": False}
        body = json.loads(api.last().content)
        assert body == {"name": "nightly", "flow_id": str(FLOW_ID), "tags": ["etl"], "parameters": {"limit": 10}}

    def test_update_accepts_no_content(self, api, client):
        api.add("PATCH", f"{SCOPE}/deployments/{DEPLOYMENT_ID}", status=204)

        client.deployments().update(DEPLOYMENT_ID, DeploymentUpdate(paused=True))

        assert json.loads(api.last().content) == {"paused": True}

    def test_update_rejects_created(self, api, client):
        api.add("PATCH", f"{SCOPE}/deployments/{DEPLOYMENT_ID}", status=201, body={})

        with pytest.raises(StatusCodeError):
            client.deployments().update(DEPLOYMENT_ID, DeploymentUpdate(paused=True))

    def test_encode_error_for_unserializable_parameters(self, api, client):
        with pytest.raises(EncodeError, match="failed to encode data"):
            client.deployments().create(
                DeploymentCreate(name="n", flow_id=FLOW_ID, parameters={"handle": object()})
            )
        assert api.requests == []


class TestWorkPoolsAndVariables:
    def test_work_pool_paused_uses_is_paused_on_the_wire(self, api, client):
        api.add(
            "POST",
            f"{SCOPE}/work_pools/",
            status=201,
            body={"id": str(DEPLOYMENT_ID), "name": "k8s", "type": "kubernetes", "is_paused": True},
        )

        pool = client.work_pools().create(WorkPoolCreate(name="k8s", type="kubernetes", paused=True))

        assert pool.paused is True
        assert json.loads(api.last().content) == {"name": "k8s", "type": "kubernetes", "is_paused": True}

    def test_work_pool_list_filters_by_name(self, api, client):
        api.add("POST", f"{SCOPE}/work_pools/filter", body=[{"id": str(DEPLOYMENT_ID), "name": "k8s"}])

        pools = client.work_pools().list(["k8s"])

        assert [p.name for p in pools] == ["k8s"]
        assert json.loads(api.last().content) == {"work_pools": {"name": {"any_": ["k8s"]}}}

    def test_variable_get_by_name(self, api, client):
        api.add(
            "GET",
            f"{SCOPE}/variables/name/region",
            body={"id": str(DEPLOYMENT_ID), "name": "region", "value": "eu-west-1", "tags": []},
        )

        variable = client.variables().get_by_name("region")

        assert variable.value == "eu-west-1"

    def test_variable_create_accepts_200(self, api, client):
        api.add(
            "POST",
            f"{SCOPE}/variables/",
            status=200,
            body={"id": str(DEPLOYMENT_ID), "name": "region", "value": "eu", "tags": ["infra"]},
        )

        variable = client.variables().create(VariableCreate(name="region", value="eu", tags=["infra"]))

        assert variable.tags == ["infra"]


class TestClientScoping:
    def test_explicit_ids_override_defaults(self, api, client):
        other_workspace = UUID("55555555-5555-5555-5555-555555555555")
        api.add(
            "GET",
            f"/api/accounts/{ACCOUNT_ID}/workspaces/{other_workspace}/flows/{FLOW_ID}",
            body={"id": str(FLOW_ID), "name": "etl"},
        )

        flow = client.flows(ACCOUNT_ID, other_workspace).get(FLOW_ID)

        assert flow.name == "etl"

    def test_self_hosted_server_uses_root_collections(self, api):
        settings = AppSettings(_env_file=None, api_url="http://localhost:4200/api/")
        api.add("GET", f"/api/flows/{FLOW_ID}", body={"id": str(FLOW_ID), "name": "etl", "tags": []})

        with PrefectClient(settings, transport=api.transport) as client:
            flow = client.flows().get(FLOW_ID)

        assert flow.id == FLOW_ID
        assert "Authorization" not in api.last().headers

    def test_account_without_workspace_is_rejected(self):
        settings = AppSettings(_env_file=None, api_url=API_URL, cloud_account_id=ACCOUNT_ID)

        with PrefectClient(settings, transport=httpx.MockTransport(lambda r: httpx.Response(200))) as client:
            with pytest.raises(ClientConfigurationError, match="workspace_id"):
                client.deployments()

    def test_workspaces_require_an_account(self):
        settings = AppSettings(_env_file=None, api_url=API_URL)

        with PrefectClient(settings, transport=httpx.MockTransport(lambda r: httpx.Response(200))) as client:
            with pytest.raises(ClientConfigurationError, match="account_id"):
                client.workspaces()

    def test_workspaces_are_account_scoped(self, api, client):
        api.add(
            "GET",
            f"/api/accounts/{ACCOUNT_ID}/workspaces/{WORKSPACE_ID}",
            body={"id": str(WORKSPACE_ID), "name": "Prod", "handle": "prod"},
        )

        workspace = client.workspaces().get(WORKSPACE_ID)

        assert workspace.handle == "prod"
