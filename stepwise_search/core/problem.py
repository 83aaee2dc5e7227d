# Defines the standard interface for any search problem (states, actions, goals, costs, heuristic, utility).
# stepwise_search/core/problem.py
from __future__ import annotations
from typing import Any, List, Optional, Protocol, TypeVar


class State(Protocol):
    """A configuration of the state space.

    `key` is the canonical identity used for explored sets and transpositions;
    two states with equal keys are the same state as far as search is concerned.
    """
    @property
    def key(self) -> str: ...
    @property
    def is_terminal(self) -> bool: ...


class Action(Protocol):
    """A named transition. Concrete actions carry their own payload."""
    @property
    def name(self) -> str: ...


S = TypeVar("S", bound=State)
A = TypeVar("A", bound=Action)


class Problem(Protocol[S, A]):
    """Canonical AI search problem interface (atomic state-space view).

    get_result must be pure: equal (state, action) inputs give states with equal keys.
    """
    initial_state: S

    def get_actions(self, state: S) -> List[A]: ...
    def get_result(self, state: S, action: A) -> S: ...
    def is_goal(self, state: S) -> bool: ...
    def get_cost(self, state: S, action: A, next_state: S) -> float: ...

    # Optional heuristic for informed search; default 0
    def get_heuristic(self, state: S) -> float:
        return 0.0

    # Optional utility for adversarial / stochastic search; default 0 (a draw)
    def get_utility(self, state: S, player: int = 0) -> float:
        return 0.0

    # Adversarial problems that know whose move it is answer True/False;
    # None lets the algorithm alternate by depth (root = maximizer).
    def is_max_turn(self, state: S) -> Optional[bool]:
        return None

    # Display payload for the renderer (tiles, board cells); None when there is none.
    def board_of(self, state: S) -> Any:
        return None
