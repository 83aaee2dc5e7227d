# stepwise_search/algorithms/astar.py
from __future__ import annotations
from .frontier import FrontierSearch


def a_star_search(problem) -> FrontierSearch:
    """A*: f = g + h. Optimal with an admissible heuristic."""
    return FrontierSearch(problem, key=lambda n: n.score(), name="A*")
