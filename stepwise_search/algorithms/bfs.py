# stepwise_search/algorithms/bfs.py
# Breadth-First Search: frontier search with no ordering key, i.e. a FIFO queue.
from __future__ import annotations
from .frontier import FrontierSearch


def breadth_first_search(problem) -> FrontierSearch:
    return FrontierSearch(problem, key=None, name="BFS")
