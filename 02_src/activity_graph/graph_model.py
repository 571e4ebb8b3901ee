"""Typed activity diagram primitives."""

from dataclasses import FrozenInstanceError, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

ACTIVITY_TYPE = "Activity"


class ActivityNodeType(Enum):
    INITIAL = "ActivityInitialNode"
    FINAL = "ActivityFinalNode"
    ACTION = "ActivityActionNode"
    OBJECT = "ActivityObjectNode"
    DECISION = "ActivityDecisionNode"
    MERGE = "ActivityMergeNode"
    FORK = "ActivityForkNode"
    FORK_HORIZONTAL = "ActivityForkNodeHorizontal"
    JOIN = "ActivityJoinNode"


_IMMUTABLE_FIELDS = frozenset({"id", "name", "node_type"})


@dataclass(eq=False)
class ActivityElement:
    """Anything that can own a parent activity or terminate a control flow.

    Identity, name and kind never change after construction. The parent link and
    an activity's children can only be set until the element is sealed into a
    finished diagram.
    """

    id: str
    name: str
    parent_activity: Optional["Activity"] = field(default=None, repr=False, init=False)
    _sealed: bool = field(default=False, repr=False, init=False)

    def __setattr__(self, key: str, value: Any) -> None:
        if key in _IMMUTABLE_FIELDS and key in self.__dict__:
            raise FrozenInstanceError(f"cannot assign to field {key!r}")
        if self.__dict__.get("_sealed"):
            raise FrozenInstanceError(f"{type(self).__name__} {self.id} belongs to a finished diagram")
        super().__setattr__(key, value)

    def seal(self) -> None:
        object.__setattr__(self, "_sealed", True)

    def set_parent_activity(self, parent: "Activity") -> bool:
        """Attach the parent once; returns False when a different parent is already set."""
        if self._sealed:
            raise FrozenInstanceError(f"{type(self).__name__} {self.id} belongs to a finished diagram")
        if self.parent_activity is not None:
            return self.parent_activity is parent
        self.parent_activity = parent
        return True

    @property
    def parent_id(self) -> Optional[str]:
        return self.parent_activity.id if self.parent_activity is not None else None

    def to_json(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "parent_id": self.parent_id}


@dataclass(eq=False)
class ActivityNode(ActivityElement):
    node_type: ActivityNodeType = ActivityNodeType.ACTION

    def to_json(self) -> Dict[str, Any]:
        payload = super().to_json()
        payload["type"] = self.node_type.value
        return payload


@dataclass(eq=False)
class Activity(ActivityElement):
    _children: List[ActivityElement] = field(default_factory=list, repr=False, init=False)

    @property
    def child_elements(self) -> Tuple[ActivityElement, ...]:
        return tuple(self._children)

    def add_child_element(self, child: ActivityElement) -> bool:
        if self._sealed:
            raise FrozenInstanceError(f"Activity {self.id} belongs to a finished diagram")
        if any(existing is child for existing in self._children):
            return False
        self._children.append(child)
        return True

    def is_descendant_of(self, other: "Activity") -> bool:
        current: Optional[Activity] = self
        while current is not None:
            if current is other:
                return True
            current = current.parent_activity
        return False

    def to_json(self) -> Dict[str, Any]:
        payload = super().to_json()
        payload["type"] = ACTIVITY_TYPE
        payload["child_ids"] = [child.id for child in self._children]
        return payload


@dataclass(frozen=True, eq=False)
class ControlFlow:
    id: str
    source: ActivityElement = field(repr=False)
    target: ActivityElement = field(repr=False)

    def __str__(self) -> str:
        return f"ControlFlow {self.source.id} -> {self.target.id}"

    def to_json(self) -> Dict[str, Any]:
        return {"id": self.id, "source": self.source.id, "target": self.target.id}


@dataclass(frozen=True)
class ActivityDiagram:
    submission_id: int
    nodes: Tuple[ActivityNode, ...] = ()
    activities: Tuple[Activity, ...] = ()
    control_flows: Tuple[ControlFlow, ...] = ()

    @property
    def model_elements(self) -> Tuple[ActivityElement, ...]:
        return tuple(self.nodes) + tuple(self.activities)

    def get_element_by_id(self, element_id: str) -> Optional[ActivityElement]:
        for element in self.model_elements:
            if element.id == element_id:
                return element
        return None

    def get_control_flow_by_id(self, control_flow_id: str) -> Optional[ControlFlow]:
        for control_flow in self.control_flows:
            if control_flow.id == control_flow_id:
                return control_flow
        return None

    def to_json(self) -> Dict[str, Any]:
        return {
            "submission_id": self.submission_id,
            "nodes": [node.to_json() for node in self.nodes],
            "activities": [activity.to_json() for activity in self.activities],
            "control_flows": [control_flow.to_json() for control_flow in self.control_flows],
        }
