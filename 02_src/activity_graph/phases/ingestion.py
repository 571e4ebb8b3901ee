"""Model ingestion phase for Apollon-style activity diagram JSON files."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping

from ..errors import UnsupportedModelError
from ..pipeline import PipelinePhase

logger = logging.getLogger("activity_graph.ingestion")

ACTIVITY_DIAGRAM_TYPE = "ActivityDiagram"


def split_model(model: Any) -> Dict[str, Dict[str, Any]]:
    """Return the element and relationship mappings of a decoded model."""
    if not isinstance(model, Mapping):
        raise UnsupportedModelError("Model payload must be a JSON object")

    diagram_type = model.get("type")
    if diagram_type is not None and diagram_type != ACTIVITY_DIAGRAM_TYPE:
        raise UnsupportedModelError(f"Unsupported diagram type: {diagram_type}")

    return {
        "model_elements": _keyed_records(model.get("elements"), "elements"),
        "control_flows": _keyed_records(model.get("relationships"), "relationships"),
    }


def _keyed_records(records: Any, section: str) -> Dict[str, Any]:
    if records is None:
        return {}
    if isinstance(records, Mapping):
        return dict(records)
    if isinstance(records, list):
        keyed: Dict[str, Any] = {}
        for position, record in enumerate(records):
            record_id = record.get("id") if isinstance(record, Mapping) else None
            keyed[str(record_id) if record_id is not None else f"{section}_{position}"] = record
        return keyed
    raise UnsupportedModelError(f"Model section '{section}' must be an object or a list")


class ModelIngestionPhase(PipelinePhase):
    phase_name = "ingestion"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        input_path = Path(str(context["input_path"]))
        try:
            model = json.loads(input_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as error:
            raise UnsupportedModelError(f"{input_path}: invalid JSON ({error.msg})") from error
        except UnicodeDecodeError as error:
            raise UnsupportedModelError(f"{input_path}: not UTF-8 encoded ({error.reason})") from error
        except OSError as error:
            raise UnsupportedModelError(f"{input_path}: cannot be read ({error.strerror or error})") from error

        records = split_model(model)
        logger.info(
            "Loaded %s: %d elements, %d relationships",
            input_path,
            len(records["model_elements"]),
            len(records["control_flows"]),
        )
        return records
