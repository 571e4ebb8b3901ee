"""Activity diagram builder wired as a LangGraph workflow."""

import logging
from typing import Any, Dict, List, Mapping, Tuple

from langgraph.graph import END, START, StateGraph
from typing_extensions import TypedDict

from .graph_model import ActivityDiagram
from .graph_orchestrator import ActivityGraphOrchestrator
from .phases import (
    ControlFlowResolverPhase,
    DiagramAssemblyPhase,
    ElementClassificationPhase,
    OwnershipLinkingPhase,
)
from .pipeline import PipelinePhase

logger = logging.getLogger("activity_graph.builder")


class BuildState(TypedDict):
    model_elements: Mapping[str, Any]
    control_flows: Mapping[str, Any]
    submission_id: int
    orchestrator: ActivityGraphOrchestrator
    ignored_element_ids: List[str]
    skipped_ownership: List[Dict[str, Any]]
    resolved_control_flow_ids: List[str]
    diagram: ActivityDiagram


class ActivityDiagramBuilder:
    """Classify -> link ownership -> resolve control flows -> assemble.

    Each step is a full sweep over its input and runs only after the previous
    one finished. Lookup tables live in a fresh orchestrator per build, so a
    builder instance can be shared between callers.
    """

    def __init__(self) -> None:
        self._workflow = self._build_workflow()

    def build(
        self,
        model_elements: Mapping[str, Any],
        control_flows: Mapping[str, Any],
        submission_id: int,
    ) -> ActivityDiagram:
        diagram, _ = self.build_with_report(model_elements, control_flows, submission_id)
        return diagram

    def build_with_report(
        self,
        model_elements: Mapping[str, Any],
        control_flows: Mapping[str, Any],
        submission_id: int,
    ) -> Tuple[ActivityDiagram, Dict[str, Any]]:
        logger.debug("Building activity diagram for submission %s", submission_id)
        result_state = self._workflow.invoke(
            {
                "model_elements": model_elements or {},
                "control_flows": control_flows or {},
                "submission_id": submission_id,
                "orchestrator": ActivityGraphOrchestrator(),
                "ignored_element_ids": [],
                "skipped_ownership": [],
                "resolved_control_flow_ids": [],
            }
        )
        diagram: ActivityDiagram = result_state["diagram"]
        report = {
            "ignored_element_ids": list(result_state.get("ignored_element_ids", [])),
            "skipped_ownership": list(result_state.get("skipped_ownership", [])),
            "node_count": len(diagram.nodes),
            "activity_count": len(diagram.activities),
            "control_flow_count": len(diagram.control_flows),
        }
        return diagram, report

    def _build_workflow(self):
        steps: List[Tuple[str, PipelinePhase]] = [
            ("classify_elements", ElementClassificationPhase()),
            ("link_ownership", OwnershipLinkingPhase()),
            ("resolve_control_flows", ControlFlowResolverPhase()),
            ("assemble_diagram", DiagramAssemblyPhase()),
        ]
        graph = StateGraph(BuildState)
        previous = START
        for step_name, phase in steps:
            graph.add_node(step_name, phase.run)
            graph.add_edge(previous, step_name)
            previous = step_name
        graph.add_edge(previous, END)
        return graph.compile()


def build_activity_diagram(
    model_elements: Mapping[str, Any],
    control_flows: Mapping[str, Any],
    submission_id: int,
) -> ActivityDiagram:
    return ActivityDiagramBuilder().build(model_elements, control_flows, submission_id)


class ActivityDiagramBuildPhase(PipelinePhase):
    phase_name = "build"

    def __init__(self, builder: ActivityDiagramBuilder | None = None) -> None:
        self._builder = builder or ActivityDiagramBuilder()

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        diagram, report = self._builder.build_with_report(
            context.get("model_elements", {}),
            context.get("control_flows", {}),
            int(context.get("submission_id", 0)),
        )
        return {"diagram": diagram, "build_report": report}
