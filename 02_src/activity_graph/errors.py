"""Failures raised while building an activity diagram."""

from typing import Dict, Iterable, Optional


class DiagramBuildError(ValueError):
    """Base class for fatal diagram build failures."""


class MalformedRecordError(DiagramBuildError):
    def __init__(self, record_id: Optional[str], field: str, record_kind: str = "element") -> None:
        self.record_id = record_id
        self.field = field
        self.record_kind = record_kind
        label = record_id if record_id else "<unknown>"
        super().__init__(f"Malformed {record_kind} record {label}: missing required field '{field}'")


class UnresolvedEndpointError(DiagramBuildError):
    """A control flow names a source or target that is not part of the model."""

    def __init__(
        self,
        relationship_id: str,
        endpoints: Iterable[str],
        references: Dict[str, Optional[str]],
    ) -> None:
        self.relationship_id = relationship_id
        self.endpoints = tuple(endpoints)
        self.references = dict(references)
        details = ", ".join(
            f"{endpoint}={self.references.get(endpoint)!r}" for endpoint in self.endpoints
        )
        super().__init__(
            f"Control flow {relationship_id}: {details} not part of model"
        )


class UnsupportedModelError(DiagramBuildError):
    """Raised when a model payload cannot be read as an activity diagram."""
