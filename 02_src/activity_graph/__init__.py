"""Typed activity diagram reconstruction from flat model records."""

from .builder import ActivityDiagramBuilder, build_activity_diagram
from .errors import (
    DiagramBuildError,
    MalformedRecordError,
    UnresolvedEndpointError,
    UnsupportedModelError,
)
from .graph_model import (
    Activity,
    ActivityDiagram,
    ActivityElement,
    ActivityNode,
    ActivityNodeType,
    ControlFlow,
)
from .graph_orchestrator import ActivityGraphOrchestrator
from .pipeline import PipelinePhase, PipelineRunner

__all__ = [
    "Activity",
    "ActivityDiagram",
    "ActivityDiagramBuilder",
    "ActivityElement",
    "ActivityGraphOrchestrator",
    "ActivityNode",
    "ActivityNodeType",
    "ControlFlow",
    "DiagramBuildError",
    "MalformedRecordError",
    "PipelinePhase",
    "PipelineRunner",
    "UnresolvedEndpointError",
    "UnsupportedModelError",
    "build_activity_diagram",
]
