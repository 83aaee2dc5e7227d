# stepwise_search/algorithms/mcts.py
# Monte Carlo Tree Search (UCT): one selection/expansion/rollout/backup iteration per step.
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import numpy as np

from ..core.algorithm import SearchAlgorithm
from ..core.node import SearchNode, root_node
from ..core.presentation import PresentationNode
from ..core.problem import Problem

logger = logging.getLogger(__name__)


class MCTSNode:
    """Statistics node of the search tree; wraps the SearchNode it was reached by."""
    def __init__(self, node: SearchNode, parent: Optional["MCTSNode"], untried: List[Any], node_id: str):
        self.node = node
        self.parent = parent
        self.id = node_id
        self.children: List[MCTSNode] = []
        self.untried_actions = untried
        self.visits = 0
        self.value = 0.0  # sum of backed-up utilities

    @property
    def state(self):
        return self.node.state

    def mean(self) -> float:
        return self.value / self.visits if self.visits > 0 else 0.0

    def is_fully_expanded(self) -> bool:
        return not self.untried_actions

    def __repr__(self):
        return f"MCTSNode(id={self.id}, N={self.visits}, W={self.value:.2f}, Q={self.mean():.2f})"


class MonteCarloTreeSearch(SearchAlgorithm):
    """
    UCT over a problem's utility.

    Selection descends through fully expanded nodes by UCB1, from the point of
    view of whoever moves at the node (is_max_turn, else depth parity);
    expansion adds exactly one child per step; the rollout plays uniformly
    random actions until a goal, a dead end or rollout_depth moves; the
    rollout state's utility is added to every node on the way back up.

    Rollouts draw from numpy's Generator, so equal seeds replay equal searches.
    COMPLETED once `iterations` iterations have run.
    """
    name = "MCTS"

    def __init__(
        self,
        problem: Problem,
        iterations: int = 1000,
        exploration: float = 1.414,
        rollout_depth: int = 50,
        seed: Optional[int] = None,
    ):
        super().__init__(problem)
        if iterations < 0 or rollout_depth < 0:
            raise ValueError("iterations and rollout_depth must be >= 0")
        self.iterations = iterations
        self.exploration = exploration
        self.rollout_depth = rollout_depth
        self.seed = seed
        self._initialize()

    def _initialize(self) -> None:
        self.rng = np.random.default_rng(self.seed)
        self._counter = 0
        self.root = self._new_node(root_node(self.problem, with_heuristic=False), None, "mcts-root")
        self.last: Optional[MCTSNode] = None

    def _new_node(self, node: SearchNode, parent: Optional[MCTSNode], prefix: str) -> MCTSNode:
        m = MCTSNode(node, parent, list(self.problem.get_actions(node.state)), f"{prefix}-{self._counter}")
        self._counter += 1
        return m

    def _step(self) -> Optional[SearchNode]:
        if self.nodes_explored >= self.iterations:
            self._complete()
            return None

        # 1. selection
        m = self.root
        while not self.problem.is_goal(m.state) and m.is_fully_expanded() and m.children:
            m = self._select_child(m)

        # 2. expansion
        if not self.problem.is_goal(m.state) and not m.is_fully_expanded():
            action = m.untried_actions.pop()
            child, _ = m.node.child(self.problem, action, with_heuristic=False)
            c = self._new_node(child, m, "mcts-node")
            m.children.append(c)
            m = c

        # 3. simulation
        result = self._utility(self._rollout(m.state))

        # 4. backpropagation
        cur: Optional[MCTSNode] = m
        while cur is not None:
            cur.visits += 1
            cur.value += result
            cur = cur.parent

        self.nodes_explored += 1
        self.current_depth = m.node.depth
        self.last = m
        if self.nodes_explored >= self.iterations:
            best = self.best_child()
            logger.debug("MCTS: budget of %d spent, most visited root move %s", self.iterations,
                         best.node.action.name if best is not None else None)
            self._complete()
        return m.node

    def _rollout(self, state):
        depth = 0
        while not self.problem.is_goal(state) and depth < self.rollout_depth:
            actions = self.problem.get_actions(state)
            if not actions:
                break
            state = self.problem.get_result(state, actions[int(self.rng.integers(len(actions)))])
            depth += 1
        return state

    def _select_child(self, m: MCTSNode) -> MCTSNode:
        sign = 1.0 if self._is_max(m.state, m.node.depth) else -1.0
        log_n = np.log(m.visits)

        def ucb1(c: MCTSNode) -> float:
            return sign * c.mean() + self.exploration * np.sqrt(log_n / c.visits)

        # first child wins ties
        best = m.children[0]
        best_score = ucb1(best)
        for c in m.children[1:]:
            score = ucb1(c)
            if score > best_score:
                best, best_score = c, score
        return best

    def best_child(self) -> Optional[MCTSNode]:
        """Most-visited root child (the move UCT recommends)."""
        if not self.root.children:
            return None
        return max(self.root.children, key=lambda c: c.visits)

    def tree(self) -> PresentationNode:
        """Regenerated from the statistics tree on every call."""
        current = self.last.id if self.last is not None else None

        def convert(m: MCTSNode) -> PresentationNode:
            return PresentationNode(
                id=m.id,
                name=m.node.action.name if m.node.action is not None else "Start",
                value=m.mean(),
                board_state=self._board(m.state),
                is_goal=self.problem.is_goal(m.state),
                visits=m.visits,
                is_visited=m.visits > 0,
                is_current=m.id == current,
            )

        self._root = convert(self.root)
        stack = [(self.root, self._root)]
        while stack:
            m, p = stack.pop()
            for c in m.children:
                cp = p.add_child(convert(c))
                stack.append((c, cp))
        return self._root

    def attributes(self) -> Dict[str, Any]:
        best = self.best_child()
        return {
            "Total Iterations": f"{self.nodes_explored} / {self.iterations}",
            "Root Visits": self.root.visits,
            "Root Value": f"{self.root.value:.2f}",
            "Exploration (C)": f"{self.exploration:.3f}",
            "Best Root Move": best.node.action.name if best is not None else "n/a",
        }
