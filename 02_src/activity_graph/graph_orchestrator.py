"""Per-build orchestrator owning the identity lookup tables of one diagram."""

import logging
from typing import Any, Dict, List, Optional

from .errors import UnresolvedEndpointError
from .graph_model import Activity, ActivityDiagram, ActivityElement, ActivityNode, ControlFlow

logger = logging.getLogger("activity_graph.orchestrator")


class ActivityGraphOrchestrator:
    """Owns identifiers and safe updates of a single diagram build."""

    def __init__(self) -> None:
        self._element_registry: Dict[str, ActivityElement] = {}
        self._activity_registry: Dict[str, Activity] = {}
        self._node_registry: Dict[str, ActivityNode] = {}
        self._control_flows: List[ControlFlow] = []
        # Mapping keys that differ from the record id, resolved to that id.
        self._record_keys: Dict[str, str] = {}

    @property
    def nodes(self) -> List[ActivityNode]:
        return list(self._node_registry.values())

    @property
    def activities(self) -> List[Activity]:
        return list(self._activity_registry.values())

    @property
    def control_flows(self) -> List[ControlFlow]:
        return list(self._control_flows)

    def register_node(self, node: ActivityNode, record_key: Optional[str] = None) -> None:
        self._forget_other_kind(node.id, self._activity_registry)
        self._node_registry[node.id] = node
        self._element_registry[node.id] = node
        self._remember_record_key(record_key, node.id)

    def register_activity(self, activity: Activity, record_key: Optional[str] = None) -> None:
        self._forget_other_kind(activity.id, self._node_registry)
        self._activity_registry[activity.id] = activity
        self._element_registry[activity.id] = activity
        self._remember_record_key(record_key, activity.id)

    def find_element(self, element_id: Optional[str]) -> Optional[ActivityElement]:
        if element_id is None:
            return None
        element = self._element_registry.get(element_id)
        if element is None and element_id in self._record_keys:
            element = self._element_registry.get(self._record_keys[element_id])
        return element

    def find_activity(self, activity_id: Optional[str]) -> Optional[Activity]:
        if activity_id is None:
            return None
        return self._activity_registry.get(activity_id)

    def link_child(self, owner_id: str, child_id: str) -> Optional[str]:
        """Attach child to owner; returns the reason when the link is skipped."""
        owner = self.find_activity(owner_id)
        if owner is None:
            return "owner_not_activity"
        child = self.find_element(child_id)
        if child is None:
            return "child_not_found"
        if isinstance(child, Activity) and owner.is_descendant_of(child):
            return "ownership_cycle"
        if not child.set_parent_activity(owner):
            return "parent_already_set"
        owner.add_child_element(child)
        return None

    def add_control_flow(
        self,
        control_flow_id: str,
        source_id: Optional[str],
        target_id: Optional[str],
    ) -> ControlFlow:
        source = self.find_element(source_id)
        target = self.find_element(target_id)
        failed = []
        if source is None:
            failed.append("source")
        if target is None:
            failed.append("target")
        if failed:
            raise UnresolvedEndpointError(
                control_flow_id,
                failed,
                {"source": source_id, "target": target_id},
            )

        control_flow = ControlFlow(id=control_flow_id, source=source, target=target)
        self._control_flows.append(control_flow)
        return control_flow

    def to_diagram(self, submission_id: int) -> ActivityDiagram:
        for element in self._element_registry.values():
            element.seal()
        return ActivityDiagram(
            submission_id=submission_id,
            nodes=tuple(self._node_registry.values()),
            activities=tuple(self._activity_registry.values()),
            control_flows=tuple(self._control_flows),
        )

    def _remember_record_key(self, record_key: Optional[str], element_id: str) -> None:
        if record_key is not None and record_key != element_id:
            self._record_keys[record_key] = element_id

    @staticmethod
    def _forget_other_kind(element_id: str, registry: Dict[str, Any]) -> None:
        if registry.pop(element_id, None) is not None:
            logger.debug("Element %s re-declared with a different kind", element_id)
