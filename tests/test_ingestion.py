"""Tests for loading activity diagram models from JSON."""

import json

import pytest

from activity_graph import UnsupportedModelError
from activity_graph.phases.ingestion import ModelIngestionPhase, split_model


def test_split_model_keeps_mappings():
    model = {
        "version": "3.0.0",
        "type": "ActivityDiagram",
        "elements": {"n1": {"id": "n1", "name": "A", "type": "ActivityActionNode"}},
        "relationships": {"f1": {"id": "f1", "source": {"element": "n1"}, "target": {"element": "n1"}}},
    }
    records = split_model(model)
    assert list(records["model_elements"]) == ["n1"]
    assert list(records["control_flows"]) == ["f1"]


def test_split_model_keys_lists_by_id():
    model = {
        "elements": [{"id": "n1", "name": "A", "type": "Action"}, {"name": "no id"}],
        "relationships": [],
    }
    records = split_model(model)
    assert list(records["model_elements"]) == ["n1", "elements_1"]
    assert records["control_flows"] == {}


def test_split_model_rejects_other_diagram_types():
    with pytest.raises(UnsupportedModelError):
        split_model({"type": "ClassDiagram", "elements": {}, "relationships": {}})


def test_split_model_rejects_non_objects():
    with pytest.raises(UnsupportedModelError):
        split_model(["not", "a", "model"])
    with pytest.raises(UnsupportedModelError):
        split_model({"elements": "bad"})


def test_ingestion_phase_reads_file(tmp_path):
    model_path = tmp_path / "model.json"
    model_path.write_text(
        json.dumps({"type": "ActivityDiagram", "elements": {}, "relationships": {}}),
        encoding="utf-8",
    )
    result = ModelIngestionPhase().run({"input_path": str(model_path)})
    assert result == {"model_elements": {}, "control_flows": {}}


def test_ingestion_phase_reports_invalid_json(tmp_path):
    model_path = tmp_path / "broken.json"
    model_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(UnsupportedModelError):
        ModelIngestionPhase().run({"input_path": str(model_path)})


def test_ingestion_phase_reports_non_utf8_bytes(tmp_path):
    model_path = tmp_path / "latin.json"
    model_path.write_bytes(b'{"elements": {"\xff": 1}}')
    with pytest.raises(UnsupportedModelError) as excinfo:
        ModelIngestionPhase().run({"input_path": str(model_path)})
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_ingestion_phase_reports_missing_file(tmp_path):
    with pytest.raises(UnsupportedModelError) as excinfo:
        ModelIngestionPhase().run({"input_path": str(tmp_path / "missing.json")})
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)
