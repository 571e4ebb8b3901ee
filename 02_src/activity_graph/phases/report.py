"""Post-build QA report phase."""

from typing import Any, Dict, List

from ..graph_model import ActivityDiagram, ActivityNodeType
from ..pipeline import PipelinePhase


class DiagramReportPhase(PipelinePhase):
    phase_name = "report"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        diagram: ActivityDiagram = context["diagram"]
        build_report = context.get("build_report", {})
        warnings: List[str] = []

        node_types = {node.node_type for node in diagram.nodes}
        if diagram.nodes and ActivityNodeType.INITIAL not in node_types:
            warnings.append("no_initial_node")
        if diagram.nodes and ActivityNodeType.FINAL not in node_types:
            warnings.append("no_final_node")
        if build_report.get("skipped_ownership"):
            warnings.append("skipped_ownership_references")

        qa_report = {
            "node_count": len(diagram.nodes),
            "activity_count": len(diagram.activities),
            "control_flow_count": len(diagram.control_flows),
            "ignored_element_count": len(build_report.get("ignored_element_ids", [])),
            "warnings": warnings,
        }
        return {"validation_report": qa_report}
