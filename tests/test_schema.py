"""
Tests for schema validation, planning and diffing
"""

from prefect_tf.core.resources.deployment import DeploymentResource
from prefect_tf.core.schema import Attribute, AttrType, Schema

from .conftest import FLOW_ID


def _schema():
    return DeploymentResource().schema()


def test_valid_config():
    assert len(_schema().validate({"name": "nightly", "flow_id": str(FLOW_ID)})) == 0


def test_missing_required_arguments():
    diags = _schema().validate({})

    assert {d.attribute for d in diags.errors()} == {"name", "flow_id"}
    assert all(d.summary == "Missing required argument" for d in diags.errors())


def test_unknown_argument():
    diags = _schema().validate({"name": "n", "flow_id": str(FLOW_ID), "colour": "red"})

    (error,) = diags.errors()
    assert error.attribute == "colour"
    assert error.summary == "Unsupported argument"


def test_read_only_attribute():
    diags = _schema().validate({"name": "n", "flow_id": str(FLOW_ID), "created": "2024-01-01T00:00:00Z"})

    assert diags.errors()[0].summary == "Invalid Configuration for Read-Only Attribute"


def test_type_errors():
    diags = _schema().validate(
        {"name": "n", "flow_id": "not-a-uuid", "paused": "yes", "tags": ["a", 1], "parameters": "{x"}
    )

    assert {d.attribute for d in diags.errors()} == {"flow_id", "paused", "tags", "parameters"}


def test_plan_applies_defaults_and_prior_state():
    prior = {"id": "abc", "created": "2024-01-01T10:00:00Z", "updated": "2024-01-02T10:00:00Z", "version": "1"}

    planned = _schema().plan({"name": "n", "flow_id": str(FLOW_ID)}, prior)

    assert planned["paused"] is False
    assert planned["tags"] == []
    assert planned["id"] == "abc"
    assert planned["created"] == prior["created"]
    assert planned["version"] == "1"
    # "updated" changes on every write, so it is not carried over
    assert "updated" not in planned


def test_plan_defaults_are_copies():
    schema = _schema()

    first = schema.plan({})
    first["tags"].append("x")

    assert schema.plan({})["tags"] == []


def test_diff_json_is_semantic():
    schema = _schema()
    state = {"name": "n", "flow_id": str(FLOW_ID), "parameters": '{"a":1,"b":2}', "paused": False, "tags": []}
    planned = dict(state, parameters='{ "b": 2, "a": 1 }', flow_id=str(FLOW_ID).upper())

    assert schema.diff(planned, state) == []


def test_diff_reports_changes():
    schema = _schema()
    state = {"name": "n", "flow_id": str(FLOW_ID), "paused": False, "tags": []}

    assert schema.diff(dict(state, paused=True, tags=["x"]), state) == ["paused", "tags"]


def test_diff_ignores_unset_computed():
    schema = _schema()
    state = {"name": "n", "flow_id": str(FLOW_ID), "description": "from server"}

    assert schema.diff({"name": "n", "flow_id": str(FLOW_ID)}, state) == []


def test_int_rejects_bool():
    schema = Schema(description="", attributes={"limit": Attribute(AttrType.INT, optional=True)})

    assert schema.validate({"limit": True}).has_error()
    assert not schema.validate({"limit": 3}).has_error()


def test_flags():
    attr = Attribute(AttrType.STRING, optional=True, computed=True)

    assert attr.flags() == "optional, computed"
    assert attr.settable


def test_replacements():
    schema = _schema()

    assert schema.replacements(["paused", "name", "flow_id"]) == ["name", "flow_id"]
    assert schema.attributes["name"].flags() == "required, forces replacement"
