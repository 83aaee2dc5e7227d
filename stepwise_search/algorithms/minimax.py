# stepwise_search/algorithms/minimax.py
# Minimax with optional alpha-beta pruning, resumable one node-event at a time.
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.algorithm import SearchAlgorithm
from ..core.node import SearchNode, root_node
from ..core.presentation import PresentationNode, child_id, slug
from ..core.problem import Problem
from ..core.utils import format_number

logger = logging.getLogger(__name__)

# frame phases
_ENTER = "enter"
_EVALUATE = "evaluate"
_DESCEND = "descend"
_RESUME = "resume"


@dataclass
class _Frame:
    """One activation of the recursive minimax, kept on an explicit stack."""
    node: SearchNode
    pres: PresentationNode
    is_max: bool
    alpha: float
    beta: float
    alpha_source: str
    beta_source: str
    actions: List[Any] = field(default_factory=list)
    next_index: int = 0
    value: float = 0.0
    phase: str = _ENTER
    child_value: float = 0.0
    child_pres: Optional[PresentationNode] = None

    @property
    def depth(self) -> int:
        return self.node.depth


class MinimaxSearch(SearchAlgorithm):
    """
    Depth-limited minimax; with use_alpha_beta=True, alpha-beta pruning.

    The recursion lives on `self.stack` so a driver can pause between any two
    events. One step() is one of:
      - enter a node (running value starts at -inf for max, +inf for min),
      - evaluate a leaf (depth >= max_depth, goal, or no actions) via get_utility,
      - resume a node after a child returned (update value and bounds, maybe cut off).

    With pruning, every node shows its alpha/beta window plus the id of the
    descendant that last moved each bound. When the window empties the rest
    of the node's actions are marked pruned; successors that were never
    materialised get "<id>-<action>-pruned" placeholder nodes.

    Authored trees are cloned and cleaned first; the user's tree is never touched.
    """

    def __init__(self, problem: Problem, max_depth: int = 3, use_alpha_beta: bool = False):
        super().__init__(problem)
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        self.max_depth = max_depth
        self.use_alpha_beta = use_alpha_beta
        self.name = "Alpha-Beta" if use_alpha_beta else "Minimax"
        self._initialize()

    def _initialize(self) -> None:
        root = root_node(self.problem, with_heuristic=False)
        authored = self._authored_root()
        if authored is not None:
            self._root = authored.clone()
            self._root.clear_search_values()
        else:
            self._root = PresentationNode(id="root", name="Start", board_state=self._board(root.state))
        self.root_value: Optional[float] = None
        self.pruned_count = 0
        self.stack: List[_Frame] = [_Frame(
            node=root,
            pres=self._root,
            is_max=self._is_max(root.state, 0),
            alpha=-math.inf,
            beta=math.inf,
            alpha_source="root",
            beta_source="root",
        )]

    def _step(self) -> Optional[SearchNode]:
        frame = self.stack[-1]
        if frame.phase == _ENTER:
            self._enter(frame)
        elif frame.phase == _EVALUATE:
            self._evaluate(frame)
        elif frame.phase == _DESCEND:
            frame = self._descend(frame)
        else:
            self._resume(frame)
        return frame.node

    # --- events --------------------------------------------------------------

    def _enter(self, frame: _Frame) -> None:
        self.nodes_explored += 1
        self.current_depth = frame.depth
        self.cursor.move_to(frame.pres)

        frame.value = -math.inf if frame.is_max else math.inf
        frame.pres.value = frame.value
        if self.use_alpha_beta:
            frame.pres.alpha = frame.alpha
            frame.pres.beta = frame.beta

        state = frame.node.state
        if frame.depth >= self.max_depth or self.problem.is_goal(state):
            frame.actions = []
        else:
            frame.actions = list(self.problem.get_actions(state))
        frame.phase = _DESCEND if frame.actions else _EVALUATE

    def _evaluate(self, frame: _Frame) -> None:
        self.cursor.move_to(frame.pres)
        utility = self._utility(frame.node.state)
        frame.value = utility
        frame.pres.value = utility
        if self.use_alpha_beta:
            frame.pres.alpha = utility
            frame.pres.beta = utility
        self._return()

    def _descend(self, parent: _Frame) -> _Frame:
        action = parent.actions[parent.next_index]
        parent.next_index += 1
        child, _ = parent.node.child(self.problem, action, with_heuristic=False)

        cid = child_id(parent.pres, action)
        pres = parent.pres.child(cid)
        if pres is None:
            pres = parent.pres.add_child(PresentationNode(
                id=cid,
                name=action.name,
                board_state=self._board(child.state),
                is_visited=False,
            ))

        frame = _Frame(
            node=child,
            pres=pres,
            is_max=self._is_max(child.state, child.depth),
            alpha=parent.alpha,
            beta=parent.beta,
            alpha_source=parent.alpha_source,
            beta_source=parent.beta_source,
        )
        self.stack.append(frame)
        self._enter(frame)
        return frame

    def _resume(self, frame: _Frame) -> None:
        self.cursor.move_to(frame.pres)
        v, source = frame.child_value, frame.child_pres.id

        if frame.is_max and v > frame.value:
            frame.value = v
            frame.pres.value = v
            if self.use_alpha_beta and v > frame.alpha:
                frame.alpha, frame.alpha_source = v, source
                frame.pres.alpha = v
                frame.pres.alpha_source = source
        elif not frame.is_max and v < frame.value:
            frame.value = v
            frame.pres.value = v
            if self.use_alpha_beta and v < frame.beta:
                frame.beta, frame.beta_source = v, source
                frame.pres.beta = v
                frame.pres.beta_source = source

        if self.use_alpha_beta:
            # a max node is cut by the bound its min ancestor set, and vice versa
            if frame.is_max and frame.value >= frame.beta:
                self._cut_off(frame, frame.beta_source)
                return
            if not frame.is_max and frame.value <= frame.alpha:
                self._cut_off(frame, frame.alpha_source)
                return

        if frame.next_index < len(frame.actions):
            frame.phase = _DESCEND
        else:
            self._return()

    def _cut_off(self, frame: _Frame, trigger: str) -> None:
        pres = frame.pres
        pres.is_cutoff_point = True
        pres.pruning_triggered_by = trigger
        remaining = frame.actions[frame.next_index:]
        logger.debug("%s: cutoff at %s (v=%s), pruning %d action(s), trigger %s",
                     self.name, pres.id, format_number(frame.value), len(remaining), trigger)
        for action in remaining:
            existing = pres.child(child_id(pres, action))
            if existing is not None:
                existing.is_pruned = True
                existing.pruning_triggered_by = trigger
            else:
                placeholder = f"{pres.id}-{slug(action.name)}-pruned"
                if pres.child(placeholder) is None:
                    pres.add_child(PresentationNode(
                        id=placeholder,
                        name=action.name,
                        is_pruned=True,
                        pruning_triggered_by=trigger,
                        is_visited=False,
                    ))
            self.pruned_count += 1
        self._return()

    def _return(self) -> None:
        """Pop the finished frame and hand its value to the caller frame."""
        done = self.stack.pop()
        done.pres.value = done.value
        if not self.stack:
            self.root_value = done.value
            self._complete()
            return
        parent = self.stack[-1]
        parent.child_value = done.value
        parent.child_pres = done.pres
        parent.phase = _RESUME

    def best_action(self) -> Optional[str]:
        """Name of the root child whose value equals the root value, once finished."""
        if self.root_value is None:
            return None
        for c in self._root.children:
            if not c.is_pruned and c.value == self.root_value:
                return c.name
        return None

    def attributes(self) -> Dict[str, Any]:
        return {
            "Max Depth": self.max_depth,
            "Alpha-Beta": "On" if self.use_alpha_beta else "Off",
            "Call Stack Depth": len(self.stack),
            "Root Value": format_number(self.root_value),
            "Pruned Branches": self.pruned_count,
        }
