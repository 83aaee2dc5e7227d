# stepwise_search/core/frontiers.py
from __future__ import annotations
from typing import Callable, Dict, List, Optional

from .node import SearchNode

NodeKey = Callable[[SearchNode], float]


class LIFOStack:
    def __init__(self, items=None):
        self.q = list(items or [])
    def push(self, x): self.q.append(x)
    def pop(self): return self.q.pop()
    def __len__(self): return len(self.q)
    def __iter__(self): return iter(self.q)


class Frontier:
    """
    Ordered list of discovered-but-unexpanded nodes, at most one per state key.

    key=None pops in insertion order (FIFO); otherwise pop() takes the node
    with the lowest key, ties broken by list order (same as a stable sort
    followed by a shift).
    """
    def __init__(self, key: Optional[NodeKey] = None):
        self.key = key
        self.nodes: List[SearchNode] = []
        self._by_state: Dict[str, SearchNode] = {}

    def push(self, node: SearchNode) -> None:
        self.nodes.append(node)
        self._by_state[node.state.key] = node

    def pop(self) -> SearchNode:
        if self.key is None:
            idx = 0
        else:
            idx = min(range(len(self.nodes)), key=lambda i: self.key(self.nodes[i]))
        node = self.nodes.pop(idx)
        del self._by_state[node.state.key]
        return node

    def get(self, state_key: str) -> Optional[SearchNode]:
        return self._by_state.get(state_key)

    def offer(self, node: SearchNode) -> bool:
        """
        Add `node`, or let it replace the queued node for the same state when
        the key ranks it strictly better. Returns True if the frontier changed.
        """
        old = self._by_state.get(node.state.key)
        if old is None:
            self.push(node)
            return True
        if self.key is not None and self.key(node) < self.key(old):
            self.nodes[self.nodes.index(old)] = node
            self._by_state[node.state.key] = node
            return True
        return False

    def __contains__(self, state_key: str) -> bool: return state_key in self._by_state
    def __len__(self): return len(self.nodes)
    def __iter__(self): return iter(self.nodes)
