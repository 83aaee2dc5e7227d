# stepwise_search/algorithms/registry.py
# Algorithm catalogue: key -> factory(problem, settings), the switch a simulation driver uses.
from __future__ import annotations
from typing import Callable, Dict, Optional

from ..config import SearchSettings
from ..core.algorithm import SearchAlgorithm
from ..core.problem import Problem
from .astar import a_star_search
from .bfs import breadth_first_search
from .dfs import depth_first_search
from .greedy import greedy_best_first_search
from .ida_star import IDAStarSearch
from .ids import IterativeDeepeningSearch
from .mcts import MonteCarloTreeSearch
from .minimax import MinimaxSearch
from .ucs import uniform_cost_search

Factory = Callable[[Problem, SearchSettings], SearchAlgorithm]

ALGORITHMS: Dict[str, Factory] = {
    "bfs": lambda p, s: breadth_first_search(p),
    "dfs": lambda p, s: depth_first_search(p),
    "ucs": lambda p, s: uniform_cost_search(p),
    "greedy": lambda p, s: greedy_best_first_search(p),
    "astar": lambda p, s: a_star_search(p),
    "ids": lambda p, s: IterativeDeepeningSearch(p, max_allowed_depth=s.max_allowed_depth),
    "idastar": lambda p, s: IDAStarSearch(p, max_iterations=s.ida_max_iterations),
    "minimax": lambda p, s: MinimaxSearch(p, max_depth=s.max_depth, use_alpha_beta=s.use_alpha_beta),
    "alpha-beta": lambda p, s: MinimaxSearch(p, max_depth=s.max_depth, use_alpha_beta=True),
    "mcts": lambda p, s: MonteCarloTreeSearch(
        p,
        iterations=s.mcts_iterations,
        exploration=s.mcts_exploration,
        rollout_depth=s.rollout_depth,
        seed=s.seed,
    ),
}

# path-finding keys vs. game keys, for drivers that filter by problem kind
PATH_ALGORITHMS = ("bfs", "dfs", "ucs", "greedy", "astar", "ids", "idastar")
GAME_ALGORITHMS = ("minimax", "alpha-beta", "mcts")


def build(key: str, problem: Problem, settings: Optional[SearchSettings] = None) -> SearchAlgorithm:
    try:
        factory = ALGORITHMS[key]
    except KeyError:
        raise ValueError(f"unknown algorithm {key!r}; expected one of {sorted(ALGORITHMS)}") from None
    return factory(problem, settings or SearchSettings())
