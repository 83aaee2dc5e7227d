# stepwise_search/problems/custom_tree.py
# A search problem over a user-authored tree: states are tree nodes, actions follow child edges.
from __future__ import annotations
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from ..core.presentation import PresentationNode
from ..core.problem import Problem


@dataclass(frozen=True)
class CustomTreeState:
    node_id: str
    node: PresentationNode = field(compare=False, repr=False)
    is_terminal: bool = False

    @property
    def key(self) -> str:
        return self.node_id


@dataclass(frozen=True)
class CustomTreeAction:
    name: str
    target_node_id: str
    cost: float


class CustomTreeProblem(Problem[CustomTreeState, CustomTreeAction]):
    """
    Authored-tree problem. Node `value` doubles as heuristic (for path search)
    and utility (for adversarial search); `cost_to_parent` is the edge cost
    (1 when absent); `is_goal` marks goals.

    `authored_root` is exposed so algorithms can clone and annotate the user's
    tree instead of generating a new one. Algorithms never mutate it.
    """
    def __init__(self, root: PresentationNode):
        self.authored_root = root
        self._nodes: Dict[str, PresentationNode] = {n.id: n for n in root.walk()}
        self.initial_state = self._state(root)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomTreeProblem":
        return cls(PresentationNode.from_dict(data))

    @classmethod
    def from_json(cls, source: Union[str, Path]) -> "CustomTreeProblem":
        """Load from a JSON string or a path to a .json file."""
        p = Path(source) if not str(source).lstrip().startswith("{") else None
        text = p.read_text(encoding="utf-8") if p is not None else str(source)
        return cls.from_dict(json.loads(text))

    def _state(self, node: PresentationNode) -> CustomTreeState:
        return CustomTreeState(node.id, node, bool(node.is_goal))

    def get_actions(self, state: CustomTreeState) -> List[CustomTreeAction]:
        return [
            CustomTreeAction(
                f"Go to {c.name}",
                c.id,
                1.0 if c.cost_to_parent is None else float(c.cost_to_parent),
            )
            for c in state.node.children
        ]

    def get_result(self, state: CustomTreeState, action: CustomTreeAction) -> CustomTreeState:
        return self._state(self._nodes[action.target_node_id])

    def is_goal(self, state: CustomTreeState) -> bool:
        return state.is_terminal

    def get_cost(self, state: CustomTreeState, action: CustomTreeAction, next_state: CustomTreeState) -> float:
        return action.cost

    def get_heuristic(self, state: CustomTreeState) -> float:
        return float(state.node.value or 0)

    def get_utility(self, state: CustomTreeState, player: int = 0) -> float:
        return float(state.node.value or 0)

    def board_of(self, state: CustomTreeState) -> Any:
        return state.node.board_state


# Small weighted tree: BFS/DFS reach G1 (cost 6), UCS/A*/Greedy reach G2 (cost 5).
SAMPLE_TREE: Dict[str, Any] = {
    "id": "S", "name": "S", "value": 4, "children": [
        {"id": "A", "name": "A", "value": 3, "costToParent": 1, "children": [
            {"id": "G1", "name": "G1", "value": 0, "costToParent": 5, "isGoal": True, "children": []},
        ]},
        {"id": "B", "name": "B", "value": 1, "costToParent": 4, "children": [
            {"id": "G2", "name": "G2", "value": 0, "costToParent": 1, "isGoal": True, "children": []},
        ]},
    ],
}


def make_sample_tree() -> CustomTreeProblem:
    return CustomTreeProblem.from_dict(SAMPLE_TREE)
