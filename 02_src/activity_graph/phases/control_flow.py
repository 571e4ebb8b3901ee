"""Control flow resolver phase with strict endpoint matching."""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..errors import MalformedRecordError
from ..graph_orchestrator import ActivityGraphOrchestrator
from ..pipeline import PipelinePhase
from .classification import ELEMENT_ID, as_identity

logger = logging.getLogger("activity_graph.control_flow")

RELATIONSHIP_SOURCE = "source"
RELATIONSHIP_TARGET = "target"
RELATIONSHIP_ENDPOINT_ID = "element"


def endpoint_id(endpoint: Any) -> Optional[str]:
    # Apollon v3 stores endpoints as {"element": <id>, "direction": ...}.
    if isinstance(endpoint, Mapping):
        return as_identity(endpoint.get(RELATIONSHIP_ENDPOINT_ID))
    return as_identity(endpoint)


class ControlFlowResolverPhase(PipelinePhase):
    phase_name = "control_flow"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator: ActivityGraphOrchestrator = context["orchestrator"]
        control_flows: Mapping[str, Any] = context.get("control_flows") or {}
        resolved: List[str] = []

        for key, record in control_flows.items():
            if not isinstance(record, Mapping):
                raise MalformedRecordError(str(key), ELEMENT_ID, record_kind="relationship")
            control_flow_id = as_identity(record.get(ELEMENT_ID))
            if control_flow_id is None:
                raise MalformedRecordError(str(key), ELEMENT_ID, record_kind="relationship")

            control_flow = orchestrator.add_control_flow(
                control_flow_id,
                endpoint_id(record.get(RELATIONSHIP_SOURCE)),
                endpoint_id(record.get(RELATIONSHIP_TARGET)),
            )
            logger.debug("Resolved %s", control_flow)
            resolved.append(control_flow.id)

        logger.info("Resolved %d control flows", len(resolved))
        return {"resolved_control_flow_ids": resolved}
