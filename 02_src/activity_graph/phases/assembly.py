"""Diagram assembly phase."""

from typing import Any, Dict

from ..graph_orchestrator import ActivityGraphOrchestrator
from ..pipeline import PipelinePhase


class DiagramAssemblyPhase(PipelinePhase):
    phase_name = "assembly"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator: ActivityGraphOrchestrator = context["orchestrator"]
        return {"diagram": orchestrator.to_diagram(int(context["submission_id"]))}
