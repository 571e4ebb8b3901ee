"""End-to-end tests for the CLI pipeline."""

import json

import pytest

from activity_graph.cli import main, run_pipeline
from activity_graph.config import DEFAULT_OUTPUT_PATH, BuilderSettings


# Keep the package logger untouched so handlers never bind to a captured stream.
@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr("activity_graph.cli.setup_logging", lambda *args, **kwargs: None)
    for name in ("ACTIVITY_GRAPH_LOG_LEVEL", "ACTIVITY_GRAPH_LOG_FILE", "ACTIVITY_GRAPH_OUTPUT_PATH"):
        monkeypatch.delenv(name, raising=False)


def _write_model(path, relationships):
    model = {
        "version": "3.0.0",
        "type": "ActivityDiagram",
        "elements": {
            "start": {"id": "start", "name": "", "type": "ActivityInitialNode", "owner": "grp"},
            "work": {"id": "work", "name": "Work", "type": "ActivityActionNode", "owner": "grp"},
            "grp": {"id": "grp", "name": "Group", "type": "Activity", "owner": None},
            "orphan": {"id": "orphan", "name": "Lost", "type": "ActivityActionNode", "owner": "nowhere"},
        },
        "relationships": relationships,
    }
    path.write_text(json.dumps(model), encoding="utf-8")


def test_run_pipeline_reports_counts_and_warnings(tmp_path):
    model_path = tmp_path / "model.json"
    _write_model(
        model_path,
        {"f1": {"id": "f1", "type": "ActivityControlFlow", "source": {"element": "start"}, "target": {"element": "work"}}},
    )

    artifact = run_pipeline(str(model_path), submission_id=4)

    assert artifact["submission_id"] == 4
    assert artifact["meta"]["submission_id"] == 4
    assert artifact["meta"]["completed_phases"] == ["ingestion", "build", "report"]
    assert [node["id"] for node in artifact["nodes"]] == ["start", "work", "orphan"]
    assert artifact["activities"][0]["child_ids"] == ["start", "work"]
    assert artifact["control_flows"] == [{"id": "f1", "source": "start", "target": "work"}]
    validation = artifact["meta"]["validation_report"]
    assert validation["control_flow_count"] == 1
    assert "no_final_node" in validation["warnings"]
    assert "skipped_ownership_references" in validation["warnings"]
    assert "no_initial_node" not in validation["warnings"]


def test_main_writes_artifact(tmp_path, capsys):
    model_path = tmp_path / "model.json"
    output_path = tmp_path / "out" / "diagram.json"
    _write_model(model_path, {})

    exit_code = main(
        ["--input-path", str(model_path), "--submission-id", "12", "--output-path", str(output_path)]
    )

    assert exit_code == 0
    saved = json.loads(output_path.read_text(encoding="utf-8"))
    assert saved["submission_id"] == 12
    assert "nodes=3" in capsys.readouterr().out


def test_main_fails_on_dangling_control_flow(tmp_path, capsys):
    model_path = tmp_path / "model.json"
    output_path = tmp_path / "diagram.json"
    _write_model(model_path, {"bad": {"id": "bad", "source": "start", "target": "ghost"}})

    exit_code = main(["--input-path", str(model_path), "--output-path", str(output_path)])

    assert exit_code == 1
    assert not output_path.exists()
    assert "bad" in capsys.readouterr().err


def test_main_fails_on_missing_input(tmp_path, capsys):
    output_path = tmp_path / "diagram.json"

    exit_code = main(["--input-path", str(tmp_path / "absent.json"), "--output-path", str(output_path)])

    assert exit_code == 1
    assert not output_path.exists()
    assert "absent.json" in capsys.readouterr().err


def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("ACTIVITY_GRAPH_LOG_LEVEL", "debug")
    monkeypatch.setenv("ACTIVITY_GRAPH_LOG_FILE", str(tmp_path / "build.log"))
    monkeypatch.setenv("ACTIVITY_GRAPH_OUTPUT_PATH", "custom.json")

    settings = BuilderSettings.from_env()

    assert settings.log_level == "DEBUG"
    assert settings.log_file == tmp_path / "build.log"
    assert settings.output_path == "custom.json"


def test_settings_defaults(monkeypatch):
    monkeypatch.setattr("activity_graph.config.load_dotenv", lambda: False)

    settings = BuilderSettings.from_env()

    assert settings == BuilderSettings(log_level="INFO", log_file=None, output_path=DEFAULT_OUTPUT_PATH)
