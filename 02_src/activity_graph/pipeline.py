"""Pipeline abstractions and sequential runner."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List

logger = logging.getLogger("activity_graph.pipeline")


class PipelinePhase(ABC):
    phase_name: str

    @abstractmethod
    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError


class PipelineRunner:
    """Runs phases in order, merging each phase's output into the shared context.

    The names of finished phases are kept under ``completed_phases``. A phase that
    raises aborts the run, so a failed build never reaches the later phases.
    """

    def __init__(self, phases: Iterable[PipelinePhase]) -> None:
        self.phases: List[PipelinePhase] = list(phases)
        names = [phase.phase_name for phase in self.phases]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate phase names: {names}")

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        current = dict(context)
        completed: List[str] = []
        for phase in self.phases:
            logger.debug("Running phase %s", phase.phase_name)
            phase_result = phase.run(current)
            if not isinstance(phase_result, dict):
                raise TypeError(f"Phase '{phase.phase_name}' must return dict context.")
            current.update(phase_result)
            completed.append(phase.phase_name)
            logger.debug("Phase %s produced %s", phase.phase_name, sorted(phase_result))
        current["completed_phases"] = completed
        return current
