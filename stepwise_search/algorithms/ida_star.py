# stepwise_search/algorithms/ida_star.py
# IDA*: iterative deepening on f = g + h instead of depth, one popped node per step.
from __future__ import annotations
import logging
import math
from typing import Any, Dict, List, Optional

from ..core.algorithm import SearchAlgorithm
from ..core.frontiers import LIFOStack
from ..core.node import SearchNode, root_node
from ..core.presentation import PresentationNode, child_id
from ..core.problem import Problem
from ..core.utils import format_number

logger = logging.getLogger(__name__)


class IDAStarSearch(SearchAlgorithm):
    """
    IDA*: Iterative Deepening A* (tree-like).
    - The first bound is h(root); a node with f > bound is pruned and its f
      recorded, and the next bound is the smallest f that exceeded this one.
    - Bounds are therefore non-decreasing (kept in `thresholds`).
    - FAILED when an iteration prunes nothing (no finite bound left) or when
      max_iterations nodes have been expanded.
    """
    name = "IDA*"

    def __init__(self, problem: Problem, max_iterations: int = 5000):
        super().__init__(problem)
        self.max_iterations = max_iterations
        self._initialize()

    def _initialize(self) -> None:
        self.threshold = float(self.problem.get_heuristic(self.problem.initial_state))
        self.thresholds: List[float] = [self.threshold]
        self.next_threshold = math.inf
        self.goal_node: Optional[SearchNode] = None
        self._root = None
        self._prepare_iteration()

    def _prepare_iteration(self) -> None:
        root = root_node(self.problem)
        self.stack = LIFOStack([root])
        self.next_threshold = math.inf

        if self._root is None:
            authored = self._authored_root()
            if authored is not None:
                self._root = authored.clone()
            else:
                self._root = PresentationNode(
                    id="root", name="Start", value=root.heuristic, board_state=self._board(root.state),
                )
        self._root.clear_annotations()
        self.cursor.clear()
        self._pres: Dict[SearchNode, PresentationNode] = {root: self._root}

    def _step(self) -> Optional[SearchNode]:
        if self.nodes_explored >= self.max_iterations:
            self._fail(f"expansion budget of {self.max_iterations} exhausted")
            return None

        if not self.stack:
            if math.isinf(self.next_threshold):
                self._fail("no node exceeded the bound; nothing left to search")
                return None
            logger.debug("IDA*: threshold %s -> %s", self.threshold, self.next_threshold)
            self.threshold = self.next_threshold
            self.thresholds.append(self.threshold)
            self._prepare_iteration()

        node = self.stack.pop()
        f = node.score()
        pres = self._pres.get(node)
        self.cursor.move_to(pres)

        if f > self.threshold:
            self.next_threshold = min(self.next_threshold, f)
            if pres is not None:
                pres.is_pruned = True
                pres.pruning_triggered_by = f"f({format_number(f)}) > limit({format_number(self.threshold)})"
            return node

        self.nodes_explored += 1
        self.current_depth = max(self.current_depth, node.depth)

        if self.problem.is_goal(node.state):
            if pres is not None:
                pres.is_goal = True
            self.goal_node = node
            self._complete()
            return node

        actions = self.problem.get_actions(node.state)
        for action in reversed(actions):
            child, cost = node.child(self.problem, action)
            self.stack.push(child)
            if pres is not None:
                cid = child_id(pres, action)
                cp = pres.child(cid)
                if cp is None:
                    cp = pres.add_child(PresentationNode(
                        id=cid,
                        name=action.name,
                        value=child.heuristic,
                        cost_to_parent=cost,
                        board_state=self._board(child.state),
                        is_goal=self.problem.is_goal(child.state),
                    ))
                self._pres[child] = cp
        return node

    def attributes(self) -> Dict[str, Any]:
        return {
            "Current f-limit (Threshold)": format_number(self.threshold),
            "Next f-limit": format_number(self.next_threshold),
            "Stack Size": len(self.stack),
            "Thresholds": [format_number(t) for t in self.thresholds],
        }
