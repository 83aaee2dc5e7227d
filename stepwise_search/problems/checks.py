# stepwise_search/problems/checks.py
# Sanity and heuristic-quality checks for problems and authored trees.
from __future__ import annotations
import math
from collections import deque
from dataclasses import dataclass
from typing import Dict, List

from ..core.presentation import PresentationNode
from ..core.problem import Problem


@dataclass(frozen=True)
class Violation:
    node_id: str
    detail: str


def sanity_check_problem(problem: Problem, max_states: int = 10_000) -> str:
    """Walks states breadth-first and checks get_cost never returns None or a negative number."""
    seen = set()
    q = deque([problem.initial_state])
    steps = 0
    while q and steps < max_states:
        s = q.popleft()
        if s.key in seen:
            continue
        seen.add(s.key)
        for a in problem.get_actions(s):
            s2 = problem.get_result(s, a)
            cost = problem.get_cost(s, a, s2)
            if cost is None:
                raise AssertionError(f"get_cost is None for (s={s.key}, a={a.name}, s'={s2.key})")
            if cost < 0:
                raise AssertionError(f"negative cost {cost} for (s={s.key}, a={a.name}, s'={s2.key})")
            q.append(s2)
        steps += 1
    return f"OK: visited {len(seen)} states; no None or negative costs."


def _h(node: PresentationNode) -> float:
    return float(node.value or 0)


def _edge(node: PresentationNode) -> float:
    return 1.0 if node.cost_to_parent is None else float(node.cost_to_parent)


def consistency_violations(root: PresentationNode) -> List[Violation]:
    """
    Canonical heuristic check: h(n) <= c(n, n') + h(n') on every edge.
    One violation per offending parent, listing the first child that breaks it.
    """
    out: List[Violation] = []
    for n in root.walk():
        for c in n.children:
            if _h(n) > _edge(c) + _h(c):
                out.append(Violation(n.id, f"{n.name}: h({_h(n):g}) > c({_edge(c):g}) + h({c.name}={_h(c):g})"))
                break
    return out


def true_costs_to_goal(root: PresentationNode) -> Dict[str, float]:
    """h* for every node: cheapest cost down to a goal in its subtree (inf if none)."""
    hstar: Dict[str, float] = {}
    # children before parents
    for n in reversed(list(root.walk())):
        if n.is_goal:
            hstar[n.id] = 0.0
        else:
            hstar[n.id] = min((_edge(c) + hstar[c.id] for c in n.children), default=math.inf)
    return hstar


def admissibility_violations(root: PresentationNode) -> List[Violation]:
    """Display-only check h(n) <= h*(n); nodes with no reachable goal are skipped."""
    hstar = true_costs_to_goal(root)
    return [
        Violation(n.id, f"{n.name}: h({_h(n):g}) > h*({hstar[n.id]:g})")
        for n in root.walk()
        if not math.isinf(hstar[n.id]) and _h(n) > hstar[n.id]
    ]
