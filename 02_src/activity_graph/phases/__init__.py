"""Pipeline phases for activity diagram construction."""

from .assembly import DiagramAssemblyPhase
from .classification import ElementClassificationPhase
from .control_flow import ControlFlowResolverPhase
from .ingestion import ModelIngestionPhase
from .ownership import OwnershipLinkingPhase
from .report import DiagramReportPhase

__all__ = [
    "ModelIngestionPhase",
    "ElementClassificationPhase",
    "OwnershipLinkingPhase",
    "ControlFlowResolverPhase",
    "DiagramAssemblyPhase",
    "DiagramReportPhase",
]
