# stepwise_search/core/presentation.py
# The render-facing tree every algorithm builds and annotates while it runs.
from __future__ import annotations
import copy
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional


class TreeFormatError(ValueError):
    """Raised by the authored-tree loader for malformed input."""


# python attribute -> JSON key of the renderer contract
_JSON_KEYS = {
    "value": "value",
    "cost_to_parent": "costToParent",
    "is_goal": "isGoal",
    "board_state": "boardState",
    "is_visited": "isVisited",
    "is_current": "isCurrent",
    "is_pruned": "isPruned",
    "pruning_triggered_by": "pruningTriggeredBy",
    "alpha": "alpha",
    "beta": "beta",
    "alpha_source": "alphaSource",
    "beta_source": "betaSource",
    "visits": "visits",
    "is_cutoff_point": "isCutoffPoint",
}


@dataclass(eq=False, slots=True)
class PresentationNode:
    """
    One node of the presentation tree.

    Structural fields (id, name, value, cost_to_parent, is_goal, children,
    board_state) describe the tree; the rest are transient annotations the
    algorithms set and clear. Optional fields left at None are omitted from
    `to_dict()`, so consumers must tolerate their absence.
    """
    id: str
    name: str
    value: Optional[float] = None
    cost_to_parent: Optional[float] = None
    is_goal: Optional[bool] = None
    children: List["PresentationNode"] = field(default_factory=list)
    board_state: Any = None
    is_visited: Optional[bool] = None
    is_current: Optional[bool] = None
    is_pruned: Optional[bool] = None
    pruning_triggered_by: Optional[str] = None
    alpha: Optional[float] = None
    beta: Optional[float] = None
    alpha_source: Optional[str] = None
    beta_source: Optional[str] = None
    visits: Optional[int] = None
    is_cutoff_point: Optional[bool] = None

    # --- navigation ---------------------------------------------------------

    def walk(self) -> Iterator["PresentationNode"]:
        """Pre-order traversal (iterative, so deep trees don't hit the recursion limit)."""
        stack = [self]
        while stack:
            n = stack.pop()
            yield n
            stack.extend(reversed(n.children))

    def child(self, node_id: str) -> Optional["PresentationNode"]:
        for c in self.children:
            if c.id == node_id:
                return c
        return None

    def find(self, node_id: str) -> Optional["PresentationNode"]:
        for n in self.walk():
            if n.id == node_id:
                return n
        return None

    def add_child(self, node: "PresentationNode") -> "PresentationNode":
        self.children.append(node)
        return node

    # --- annotation housekeeping -------------------------------------------

    def clear_annotations(self) -> None:
        """Clear per-iteration flags but keep structure, so the display doesn't collapse."""
        for n in self.walk():
            n.is_visited = False
            n.is_current = False
            n.is_pruned = False
            n.pruning_triggered_by = None

    def clear_search_values(self) -> None:
        """Strip everything a previous adversarial run may have left on a cloned tree."""
        for n in self.walk():
            n.alpha = None
            n.beta = None
            n.alpha_source = None
            n.beta_source = None
            n.is_pruned = None
            n.is_cutoff_point = None
            n.pruning_triggered_by = None
            n.is_visited = None
            n.is_current = None
            if n.value is not None and math.isinf(n.value):
                n.value = None

    def clone(self) -> "PresentationNode":
        return copy.deepcopy(self)

    # --- JSON-shaped contract ----------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"id": self.id, "name": self.name}
        for attr, key in _JSON_KEYS.items():
            v = getattr(self, attr)
            if v is not None:
                out[key] = list(v) if attr == "board_state" and isinstance(v, tuple) else v
        out["children"] = [c.to_dict() for c in self.children]
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PresentationNode":
        """Load an authored tree `{id, name, value?, costToParent?, isGoal?, children}`."""
        root = cls._from_dict(data, path="root")
        seen = set()
        for n in root.walk():
            if n.id in seen:
                raise TreeFormatError(f"duplicate node id {n.id!r}")
            seen.add(n.id)
        return root

    @classmethod
    def _from_dict(cls, data: Any, path: str) -> "PresentationNode":
        if not isinstance(data, dict):
            raise TreeFormatError(f"{path}: expected an object, got {type(data).__name__}")
        if "id" not in data:
            raise TreeFormatError(f"{path}: missing 'id'")
        if not isinstance(data.get("children"), list):
            raise TreeFormatError(f"{path}: missing 'children' list")
        node = cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            value=data.get("value"),
            cost_to_parent=data.get("costToParent"),
            is_goal=data.get("isGoal"),
            board_state=data.get("boardState"),
        )
        for i, c in enumerate(data["children"]):
            node.children.append(cls._from_dict(c, f"{path}.children[{i}]"))
        return node


class CurrentCursor:
    """
    Explicit reference to the highlighted node, so the old highlight is
    cleared directly instead of searched for. Keeps at most one is_current.
    """
    def __init__(self) -> None:
        self.node: Optional[PresentationNode] = None

    def move_to(self, node: Optional[PresentationNode]) -> None:
        if self.node is not None:
            self.node.is_current = False
        self.node = node
        if node is not None:
            node.is_current = True
            node.is_visited = True

    def clear(self) -> None:
        self.move_to(None)


def slug(name: str) -> str:
    return "_".join(name.split())


def child_id(parent: PresentationNode, action: Any) -> str:
    """Deterministic id for the presentation child reached by `action`."""
    target = getattr(action, "target_node_id", None)
    return target or f"{parent.id}-{slug(action.name)}"
