# This code implements Uniform Cost Search (UCS) by reusing the generic frontier search.
# stepwise_search/algorithms/ucs.py
from __future__ import annotations
from .frontier import FrontierSearch


def uniform_cost_search(problem) -> FrontierSearch:
    return FrontierSearch(problem, key=lambda n: n.path_cost, name="UCS")
