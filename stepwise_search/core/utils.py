# stepwise_search/core/utils.py
# Helpers for reading a solution back out of a goal SearchNode.
from __future__ import annotations
from typing import List, Optional, Tuple
from .node import SearchNode


def reconstruct_path(node: SearchNode) -> Tuple[List[str], float]:
    actions = []
    cost = float(node.path_cost)
    cur = node
    while cur.parent is not None:
        actions.append(cur.action.name)
        cur = cur.parent
    actions.reverse()
    return actions, cost


def path_states(node: Optional[SearchNode]) -> List[str]:
    """State keys from the root down to `node` (empty for None)."""
    keys = []
    cur = node
    while cur is not None:
        keys.append(cur.state.key)
        cur = cur.parent
    keys.reverse()
    return keys


def format_number(x: Optional[float]) -> str:
    # ints print without the trailing .0; infinities as symbols
    if x is None:
        return "n/a"
    if x == float("inf"):
        return "∞"
    if x == float("-inf"):
        return "-∞"
    if float(x).is_integer():
        return str(int(x))
    return f"{x:.1f}"
