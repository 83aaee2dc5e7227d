# stepwise_search/algorithms/ids.py
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from ..core.algorithm import SearchAlgorithm
from ..core.frontiers import LIFOStack
from ..core.node import SearchNode, root_node
from ..core.presentation import PresentationNode, child_id
from ..core.problem import Problem

logger = logging.getLogger(__name__)


class IterativeDeepeningSearch(SearchAlgorithm):
    """
    Iterative Deepening Search (tree-like), one popped node per step.

    Runs a depth-limited DFS off an explicit stack with limits 0, 1, 2, ...;
    when the stack empties without a goal the limit grows and the stack is
    reseeded from the root. The presentation tree keeps its structure across
    iterations (children are reused by id) and only the per-iteration flags
    are cleared, so the display doesn't collapse between passes.

    Fails when the limit would pass max_allowed_depth. It also fails earlier,
    at whatever limit it has reached, when an iteration finished without
    cutting anything off: the whole space was seen and deeper limits would
    replay it.
    """
    name = "IDS"

    def __init__(self, problem: Problem, max_allowed_depth: int = 50):
        super().__init__(problem)
        if max_allowed_depth < 0:
            raise ValueError("max_allowed_depth must be >= 0")
        self.max_allowed_depth = max_allowed_depth
        self._initialize()

    def _initialize(self) -> None:
        self.current_limit = 0
        self.iterations = 0
        self.max_path_length = 0
        self.goal_node: Optional[SearchNode] = None
        self._root = None
        self._prepare_iteration()

    def _prepare_iteration(self) -> None:
        root = root_node(self.problem, with_heuristic=False)
        self.stack = LIFOStack([root])
        self._cutoff = False
        self.iterations += 1

        if self._root is None:
            authored = self._authored_root()
            if authored is not None:
                self._root = authored.clone()
            else:
                self._root = PresentationNode(id="root", name="Start", board_state=self._board(root.state))
        self._root.clear_annotations()
        self.cursor.clear()
        self._pres: Dict[SearchNode, PresentationNode] = {root: self._root}

    def _step(self) -> Optional[SearchNode]:
        if not self.stack:
            if not self._cutoff:
                self._fail(f"space exhausted at depth limit {self.current_limit}")
                return None
            self.current_limit += 1
            if self.current_limit > self.max_allowed_depth:
                self._fail(f"depth limit exceeded max_allowed_depth={self.max_allowed_depth}")
                return None
            logger.debug("IDS: starting iteration with depth limit %d", self.current_limit)
            self._prepare_iteration()

        node = self.stack.pop()
        self.nodes_explored += 1
        self.current_depth = node.depth
        self.max_path_length = max(self.max_path_length, node.depth + 1)
        pres = self._pres.get(node)
        self.cursor.move_to(pres)

        if self.problem.is_goal(node.state):
            if pres is not None:
                pres.is_goal = True
            self.goal_node = node
            self._complete()
            return node

        if node.depth < self.current_limit:
            actions = self.problem.get_actions(node.state)
            # reversed so the first action is popped first
            for action in reversed(actions):
                child, cost = node.child(self.problem, action, with_heuristic=False)
                self.stack.push(child)
                if pres is not None:
                    self._pres[child] = self._presentation_child(pres, action, child, cost)
        elif self.problem.get_actions(node.state):
            self._cutoff = True

        return node

    def _presentation_child(self, parent: PresentationNode, action, child: SearchNode, cost: float) -> PresentationNode:
        cid = child_id(parent, action)
        existing = parent.child(cid)
        if existing is not None:
            return existing
        return parent.add_child(PresentationNode(
            id=cid,
            name=action.name,
            cost_to_parent=cost,
            board_state=self._board(child.state),
            is_goal=self.problem.is_goal(child.state),
        ))

    def attributes(self) -> Dict[str, Any]:
        return {
            "Current Depth Limit": self.current_limit,
            "Max Allowed Depth": self.max_allowed_depth,
            "Stack Size": len(self.stack),
            "Iteration": self.iterations,
        }
