"""Element classification phase: typed nodes and activities from raw records."""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional

from ..errors import MalformedRecordError
from ..graph_model import ACTIVITY_TYPE, Activity, ActivityNode, ActivityNodeType
from ..graph_orchestrator import ActivityGraphOrchestrator
from ..pipeline import PipelinePhase

logger = logging.getLogger("activity_graph.classification")

ELEMENT_ID = "id"
ELEMENT_NAME = "name"
ELEMENT_TYPE = "type"
ELEMENT_OWNER = "owner"

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_SEPARATORS = re.compile(r"[\s\-_]+")


def as_identity(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


def normalize_element_type(element_type: Any) -> Optional[str]:
    """ActivityForkNodeHorizontal -> ACTIVITY_FORK_NODE_HORIZONTAL."""
    if not isinstance(element_type, str):
        return None
    spaced = _CAMEL_BOUNDARY.sub("_", element_type.strip())
    normalized = _SEPARATORS.sub("_", spaced).strip("_").upper()
    return normalized or None


def node_type_for(element_type: Any) -> Optional[ActivityNodeType]:
    normalized = normalize_element_type(element_type)
    if normalized is None:
        return None
    tokens = normalized.split("_")
    if len(tokens) > 1 and tokens[0] == "ACTIVITY":
        tokens = tokens[1:]
    key = "_".join(token for token in tokens if token != "NODE")
    return ActivityNodeType.__members__.get(key)


def is_activity_type(element_type: Any) -> bool:
    return normalize_element_type(element_type) == ACTIVITY_TYPE.upper()


def _require(record: Mapping[str, Any], field: str, record_id: Optional[str]) -> Any:
    value = record.get(field)
    if value is None:
        raise MalformedRecordError(record_id, field)
    return value


def parse_activity_node(node_type: ActivityNodeType, record: Mapping[str, Any]) -> ActivityNode:
    element_id = as_identity(record.get(ELEMENT_ID))
    if element_id is None:
        raise MalformedRecordError(None, ELEMENT_ID)
    name = _require(record, ELEMENT_NAME, element_id)
    return ActivityNode(id=element_id, name=str(name), node_type=node_type)


def parse_activity(record: Mapping[str, Any]) -> Activity:
    element_id = as_identity(record.get(ELEMENT_ID))
    if element_id is None:
        raise MalformedRecordError(None, ELEMENT_ID)
    name = _require(record, ELEMENT_NAME, element_id)
    return Activity(id=element_id, name=str(name))


class ElementClassificationPhase(PipelinePhase):
    phase_name = "classification"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator: ActivityGraphOrchestrator = context["orchestrator"]
        model_elements: Mapping[str, Any] = context.get("model_elements") or {}
        ignored: List[str] = []

        for key, record in model_elements.items():
            if not isinstance(record, Mapping):
                logger.debug("Ignoring element %s: record is not a mapping", key)
                ignored.append(str(key))
                continue

            element_type = record.get(ELEMENT_TYPE)
            node_type = node_type_for(element_type)
            if node_type is not None:
                orchestrator.register_node(parse_activity_node(node_type, record), record_key=str(key))
            elif is_activity_type(element_type):
                orchestrator.register_activity(parse_activity(record), record_key=str(key))
            else:
                logger.debug("Ignoring element %s of type %r", key, element_type)
                ignored.append(str(key))

        logger.info(
            "Classified %d nodes and %d activities, ignored %d elements",
            len(orchestrator.nodes),
            len(orchestrator.activities),
            len(ignored),
        )
        return {"ignored_element_ids": ignored}
