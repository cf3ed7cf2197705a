"""Tests for the command line interface."""

import json

import pytest
from typer.testing import CliRunner

from ermodel.cli.app import app

runner = CliRunner()

SCHEMA = {
    "entities": [
        {
            "name": "todo",
            "plural": "todos",
            "fields": [
                {"name": "id", "type": "AUTO_INCREMENT"},
                {"name": "title", "type": "STRING", "optional": False, "unique": True},
                {"name": "doneStatus", "type": "BOOLEAN", "default": False},
            ],
        },
        {"name": "project", "fields": [{"name": "title", "type": "STRING"}]},
    ],
    "relationships": [{"name": "tasks", "from": "project", "to": "todo"}],
}


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(SCHEMA))
    return path


def write_payload(tmp_path, payload):
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(payload))
    return path


def test_describe(schema_file):
    result = runner.invoke(app, ["describe", str(schema_file)])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "todo (todos)" in lines
    assert "  - title: STRING [mandatory, unique]" in lines
    assert "  - doneStatus: BOOLEAN [optional]" in lines
    assert "  > tasks -> todo (ONE_TO_MANY)" in lines


def test_validate_valid_payload(schema_file, tmp_path):
    payload = write_payload(tmp_path, {"title": "Write docs", "doneStatus": True})
    result = runner.invoke(app, ["validate", str(schema_file), "todos", str(payload)])
    assert result.exit_code == 0
    assert "✓ Valid todo" in result.output


def test_validate_reports_every_error(schema_file, tmp_path):
    payload = write_payload(tmp_path, {"id": 4, "doneStatus": "maybe"})
    result = runner.invoke(app, ["validate", str(schema_file), "todo", str(payload)])
    assert result.exit_code == 1
    assert "✗ id : field is an ID, you can't set it" in result.output
    assert "✗ doneStatus : maybe does not match type BOOLEAN (true, false)" in result.output


def test_validate_allow_ids_then_mandatory_check(schema_file, tmp_path):
    payload = write_payload(tmp_path, {"id": 4})
    result = runner.invoke(app, ["validate", str(schema_file), "todo", str(payload), "--allow-ids"])
    assert result.exit_code == 1
    assert "✗ title : field is mandatory" in result.output


def test_validate_unknown_entity(schema_file, tmp_path):
    payload = write_payload(tmp_path, {})
    result = runner.invoke(app, ["validate", str(schema_file), "user", str(payload)])
    assert result.exit_code == 2


def test_validate_rejects_non_object_payload(schema_file, tmp_path):
    payload = write_payload(tmp_path, ["title"])
    result = runner.invoke(app, ["validate", str(schema_file), "todo", str(payload)])
    assert result.exit_code == 2


def test_example_is_repeatable(schema_file):
    first = runner.invoke(app, ["example", str(schema_file), "todo", "--seed", "7"])
    second = runner.invoke(app, ["example", str(schema_file), "todo", "--seed", "7"])
    assert first.exit_code == 0
    assert first.output == second.output

    values = json.loads(first.output)
    assert set(values) == {"id", "title", "doneStatus"}
    assert values["doneStatus"] == "false"
    assert 1 <= int(values["id"]) < 100
    assert len(values["title"]) == 20


def test_example_accepts_plural_name(schema_file):
    singular = runner.invoke(app, ["example", str(schema_file), "todo", "--seed", "3"])
    plural = runner.invoke(app, ["example", str(schema_file), "todos", "--seed", "3"])
    assert plural.exit_code == 0
    assert plural.output == singular.output


def test_example_unknown_entity(schema_file):
    result = runner.invoke(app, ["example", str(schema_file), "users"])
    assert result.exit_code == 2
