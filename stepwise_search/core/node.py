# stepwise_search/core/node.py
# SearchNode: one expanded state in a search tree, with its back-pointer, g, h and depth.
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Generic, Iterator, List, Optional, Tuple

from .problem import A, Problem, S


@dataclass(frozen=True, eq=False)
class SearchNode(Generic[S, A]):
    """
    Immutable search-tree node. Identity-hashed so algorithms can key
    presentation lookups by node object; `parent` is only ever set here.
    """
    state: S
    parent: Optional["SearchNode[S, A]"] = None
    action: Optional[A] = None
    path_cost: float = 0.0
    heuristic: float = 0.0
    depth: int = 0

    def score(self) -> float:
        return self.path_cost + self.heuristic

    def child(self, problem: Problem[S, A], action: A, with_heuristic: bool = True) -> Tuple["SearchNode[S, A]", float]:
        """Apply one action and return (child, step_cost); raises if the cost mapping is broken."""
        s2 = problem.get_result(self.state, action)
        cost = problem.get_cost(self.state, action, s2)
        if cost is None:
            raise ValueError(
                f"get_cost returned None for (s={self.state.key!r}, a={action.name!r}, s'={s2.key!r}). "
                "Check your problem's actions/result/cost mapping."
            )
        node = SearchNode(
            state=s2,
            parent=self,
            action=action,
            path_cost=self.path_cost + float(cost),
            heuristic=float(problem.get_heuristic(s2)) if with_heuristic else 0.0,
            depth=self.depth + 1,
        )
        return node, float(cost)

    def expand(self, problem: Problem[S, A]) -> Iterator[Tuple[A, "SearchNode[S, A]", float]]:
        """Yield (action, child, step_cost) for every action available here, in problem order."""
        for a in problem.get_actions(self.state):
            c, cost = self.child(problem, a)
            yield a, c, cost

    def path(self) -> List["SearchNode[S, A]"]:
        """Nodes from the root down to this one."""
        out = []
        cur: Optional[SearchNode[S, A]] = self
        while cur is not None:
            out.append(cur)
            cur = cur.parent
        out.reverse()
        return out

    def solution(self) -> List[str]:
        return [n.action.name for n in self.path()[1:]]

    def __repr__(self) -> str:
        act = self.action.name if self.action is not None else None
        return f"SearchNode(key={self.state.key!r}, action={act!r}, g={self.path_cost}, h={self.heuristic}, d={self.depth})"


def root_node(problem: Problem[S, A], with_heuristic: bool = True) -> SearchNode[S, A]:
    s = problem.initial_state
    h: Any = problem.get_heuristic(s) if with_heuristic else 0.0
    return SearchNode(state=s, heuristic=float(h))
