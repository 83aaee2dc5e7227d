# stepwise_search/core/algorithm.py
# Base class for every step-wise search: the status state machine plus the step/run/reset contract.
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Generic, Optional

from .metrics import SearchMetrics
from .node import SearchNode
from .presentation import CurrentCursor, PresentationNode
from .problem import A, Problem, S

logger = logging.getLogger(__name__)


class SearchStatus(str, Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class SearchAlgorithm(ABC, Generic[S, A]):
    """
    A search expressed as a resumable computation.

    The driver calls step() for one logical unit of work at a time and polls
    `status` afterwards; run() just keeps stepping. Termination is never an
    exception: an exhausted frontier or a blown budget ends in FAILED, a
    found goal (or a finished evaluation) in COMPLETED.

    Subclasses implement _initialize() (build frontier/stack/tree from the
    problem) and _step() (one unit of work while RUNNING).
    """
    name = "Search"

    def __init__(self, problem: Problem[S, A]):
        self.problem = problem
        self.status = SearchStatus.IDLE
        self.nodes_explored = 0
        self.current_depth = 0
        self.steps_taken = 0
        self.cursor = CurrentCursor()
        self._root: Optional[PresentationNode] = None

    # --- contract ------------------------------------------------------------

    def step(self) -> Optional[SearchNode[S, A]]:
        """Do one unit of work; returns the most relevant node or None."""
        if self.is_finished:
            return None
        if self.status is SearchStatus.IDLE:
            self._set_status(SearchStatus.RUNNING)
        self.steps_taken += 1
        return self._step()

    def run(self, max_steps: Optional[int] = None) -> Optional[SearchNode[S, A]]:
        """Step until the status leaves RUNNING (or max_steps is hit); returns the last node."""
        result: Optional[SearchNode[S, A]] = None
        taken = 0
        while not self.is_finished:
            if max_steps is not None and taken >= max_steps:
                break
            node = self.step()
            taken += 1
            if node is not None:
                result = node
        return result

    def reset(self) -> None:
        """Back to a state equivalent to fresh construction."""
        self.status = SearchStatus.IDLE
        self.nodes_explored = 0
        self.current_depth = 0
        self.steps_taken = 0
        self.cursor = CurrentCursor()
        self._root = None
        self._initialize()
        logger.debug("%s reset", self.name)

    @property
    def is_finished(self) -> bool:
        return self.status in (SearchStatus.COMPLETED, SearchStatus.FAILED)

    def metrics(self) -> SearchMetrics:
        return SearchMetrics(self.nodes_explored, self.current_depth, self.status.value)

    def attributes(self) -> Dict[str, Any]:
        """Display-oriented key -> value map; advisory only."""
        return {}

    def tree(self) -> PresentationNode:
        """Root of the presentation tree."""
        return self._root

    # --- hooks ---------------------------------------------------------------

    @abstractmethod
    def _initialize(self) -> None: ...

    @abstractmethod
    def _step(self) -> Optional[SearchNode[S, A]]: ...

    # --- helpers for subclasses ---------------------------------------------

    def _set_status(self, status: SearchStatus) -> None:
        if status is not self.status:
            level = logging.INFO if status in (SearchStatus.COMPLETED, SearchStatus.FAILED) else logging.DEBUG
            logger.log(level, "%s: %s -> %s after %d nodes", self.name, self.status.value, status.value, self.nodes_explored)
            self.status = status

    def _complete(self) -> None:
        self._set_status(SearchStatus.COMPLETED)

    def _fail(self, reason: str) -> None:
        logger.info("%s failed: %s", self.name, reason)
        self._set_status(SearchStatus.FAILED)

    def _utility(self, state: S) -> float:
        fn = getattr(self.problem, "get_utility", None)
        return float(fn(state, 0)) if fn is not None else 0.0

    def _is_max(self, state: S, depth: int) -> bool:
        fn = getattr(self.problem, "is_max_turn", None)
        turn = fn(state) if fn is not None else None
        return depth % 2 == 0 if turn is None else bool(turn)

    def _board(self, state: S) -> Any:
        fn = getattr(self.problem, "board_of", None)
        return fn(state) if fn is not None else None

    def _authored_root(self) -> Optional[PresentationNode]:
        return getattr(self.problem, "authored_root", None)
