# stepwise_search/algorithms/greedy.py
from __future__ import annotations
from .frontier import FrontierSearch


def greedy_best_first_search(problem) -> FrontierSearch:
    # greedy: f = 0 + h
    return FrontierSearch(problem, key=lambda n: n.heuristic, name="Greedy")
