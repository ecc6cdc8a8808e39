"""
Tests for the JSON config/state files
"""

import json

import pytest

from prefect_tf.adapters.state_store import StateFileError, export_state_json, load_json_object, load_state


def test_export_then_load(tmp_path):
    path = tmp_path / "nested" / "flow.tfstate.json"

    export_state_json(type_name="prefect_flow", state={"name": "etl", "id": "x"}, output_path=path)

    raw = path.read_text(encoding="utf-8")
    assert raw.endswith("\n")
    assert json.loads(raw) == {"type": "prefect_flow", "attributes": {"id": "x", "name": "etl"}}
    assert load_state(path, "prefect_flow") == {"id": "x", "name": "etl"}


def test_type_mismatch(tmp_path):
    path = export_state_json(type_name="prefect_flow", state={}, output_path=tmp_path / "s.json")

    with pytest.raises(StateFileError, match="expected 'prefect_variable'"):
        load_state(path, "prefect_variable")


@pytest.mark.parametrize("content", ["[1, 2]", "{broken", ""])
def test_invalid_json_object(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(StateFileError):
        load_json_object(path)


def test_missing_file(tmp_path):
    with pytest.raises(StateFileError, match="cannot read"):
        load_json_object(tmp_path / "missing.json")


def test_state_without_attributes(tmp_path):
    path = tmp_path / "s.json"
    path.write_text('{"type": "prefect_flow"}', encoding="utf-8")

    with pytest.raises(StateFileError, match="no 'attributes'"):
        load_state(path)
