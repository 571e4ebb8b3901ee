"""Ownership phase: second sweep attaching children to their parent activities."""

import logging
from typing import Any, Dict, List, Mapping

from ..graph_orchestrator import ActivityGraphOrchestrator
from ..pipeline import PipelinePhase
from .classification import ELEMENT_ID, ELEMENT_OWNER, as_identity

logger = logging.getLogger("activity_graph.ownership")


class OwnershipLinkingPhase(PipelinePhase):
    """Best-effort: unresolvable owners are skipped, never fatal."""

    phase_name = "ownership"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator: ActivityGraphOrchestrator = context["orchestrator"]
        model_elements: Mapping[str, Any] = context.get("model_elements") or {}
        skipped: List[Dict[str, Any]] = []
        linked = 0

        for record in model_elements.values():
            if not isinstance(record, Mapping) or record.get(ELEMENT_OWNER) is None:
                continue

            owner_id = as_identity(record.get(ELEMENT_OWNER))
            element_id = as_identity(record.get(ELEMENT_ID))
            reason = "owner_not_activity" if owner_id is None else "child_not_found"
            if owner_id is not None and element_id is not None:
                reason = orchestrator.link_child(owner_id, element_id)
            if reason is None:
                linked += 1
                continue

            logger.debug(
                "Skipping ownership %s -> %s: %s", element_id, owner_id, reason
            )
            skipped.append({"element_id": element_id, "owner_id": owner_id, "reason": reason})

        logger.info("Linked %d children, skipped %d ownership references", linked, len(skipped))
        return {"skipped_ownership": skipped}
