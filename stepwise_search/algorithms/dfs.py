# stepwise_search/algorithms/dfs.py
# Depth-First Search: deepest frontier node first, which makes the list behave like a stack.
from __future__ import annotations
from .frontier import FrontierSearch


def depth_first_search(problem) -> FrontierSearch:
    return FrontierSearch(problem, key=lambda n: -n.depth, name="DFS")
