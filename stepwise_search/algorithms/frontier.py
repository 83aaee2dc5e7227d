# stepwise_search/algorithms/frontier.py
# Generic frontier search: BFS, DFS, UCS, Greedy and A* differ only in how the frontier is ordered.
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Set

from ..core.algorithm import SearchAlgorithm
from ..core.frontiers import Frontier, NodeKey
from ..core.node import SearchNode, root_node
from ..core.presentation import PresentationNode, child_id
from ..core.problem import Problem
from ..core.utils import format_number

logger = logging.getLogger(__name__)


class FrontierSearch(SearchAlgorithm):
    """
    Best-first search over a list frontier plus an explored set of state keys.

    `key` orders the frontier (lowest first); None means FIFO. Each step pops
    one node, goal-tests it, and expands it. A successor already on the
    frontier is replaced only when `key` ranks the new path strictly better,
    which gives UCS/A* their re-weighting without duplicate entries. The
    presentation tree still gets a child for every unexplored successor, so a
    state reachable along two edges shows up under both parents.
    """
    def __init__(self, problem: Problem, key: Optional[NodeKey] = None, name: str = "BestFirst"):
        super().__init__(problem)
        self.key = key
        self.name = name
        self._initialize()

    def _initialize(self) -> None:
        root = root_node(self.problem)
        self.frontier = Frontier(self.key)
        self.frontier.push(root)
        self.explored: Set[str] = set()
        self.expansion_order: List[str] = []
        self.goal_node: Optional[SearchNode] = None

        authored = self._authored_root()
        self._root = PresentationNode(
            id=authored.id if authored is not None else "root",
            name=authored.name if authored is not None else "Start",
            value=root.heuristic,
            board_state=self._board(root.state),
            is_goal=self.problem.is_goal(root.state),
        )
        self._pres: Dict[SearchNode, PresentationNode] = {root: self._root}

    def _step(self) -> Optional[SearchNode]:
        if not self.frontier:
            self._fail("frontier exhausted")
            return None

        node = self.frontier.pop()
        self.nodes_explored += 1
        self.current_depth = max(self.current_depth, node.depth)
        pres = self._pres.get(node)
        self.cursor.move_to(pres)

        if self.problem.is_goal(node.state):
            logger.debug("%s: goal %s at depth %d, g=%s", self.name, node.state.key, node.depth, node.path_cost)
            self.goal_node = node
            self._complete()
            return node

        self.explored.add(node.state.key)
        self.expansion_order.append(node.state.key)
        for action, child, cost in node.expand(self.problem):
            if child.state.key in self.explored:
                continue
            accepted = self.frontier.offer(child)
            if pres is None:
                continue
            shown = pres.add_child(PresentationNode(
                id=child_id(pres, action),
                name=action.name,
                value=child.heuristic,
                cost_to_parent=cost,
                board_state=self._board(child.state),
                is_goal=self.problem.is_goal(child.state),
            ))
            # only the frontier's copy is expanded later
            if accepted:
                self._pres[child] = shown
        return node

    def _label(self, n: SearchNode) -> str:
        ref = getattr(n.state, "node", None)
        if ref is not None:
            return ref.name
        return n.action.name if n.action is not None else "Start"

    def attributes(self) -> Dict[str, Any]:
        open_list = [f"{self._label(n)} (f={n.score():.1f})" for n in self.frontier]
        closed = [k if len(k) <= 15 else k[:12] + "..." for k in self.expansion_order]
        return {
            "Algorithm": self.name,
            "Open List (Frontier)": open_list or ["(Empty)"],
            "Closed List (Explored)": closed or ["(Empty)"],
            "Total Visited": len(self.explored),
            "Deepest Node": format_number(self.current_depth),
        }
