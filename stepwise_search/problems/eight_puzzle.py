# stepwise_search/problems/eight_puzzle.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.problem import Problem

Board = Tuple[int, ...]

DEFAULT_GOAL: Board = (1, 2, 3, 4, 5, 6, 7, 8, 0)

# blank moves: name -> (direction, row delta, col delta)
_MOVES = {
    "Move Up": ("UP", -1, 0),
    "Move Down": ("DOWN", 1, 0),
    "Move Left": ("LEFT", 0, -1),
    "Move Right": ("RIGHT", 0, 1),
}


@dataclass(frozen=True)
class PuzzleState:
    board: Board
    empty_index: int
    is_terminal: bool = False

    @property
    def key(self) -> str:
        return ",".join(map(str, self.board))


@dataclass(frozen=True)
class PuzzleAction:
    name: str
    direction: str
    target_index: int


def _validate(board: Sequence[int], size: int, what: str) -> Board:
    b = tuple(int(x) for x in board)
    if sorted(b) != list(range(size * size)):
        raise ValueError(f"{what} must be a permutation of 0..{size * size - 1}, got {list(board)}")
    return b


def ordered_goal(size: int) -> Board:
    """Tiles in reading order with the blank last."""
    return tuple(range(1, size * size)) + (0,)


def inversions(board: Sequence[int]) -> int:
    tiles = [t for t in board if t != 0]
    return sum(1 for i in range(len(tiles)) for j in range(i + 1, len(tiles)) if tiles[i] > tiles[j])


class EightPuzzle(Problem[PuzzleState, PuzzleAction]):
    """
    Sliding-tile puzzle on a size x size board (0 is the blank).

    - State: PuzzleState(board tuple, index of the blank)
    - ACTIONS(s): subset of {'Move Up','Move Down','Move Left','Move Right'} for the blank
    - RESULT(s,a): swap blank with a.target_index
    - IS-GOAL(s): board == goal
    - c(s,a,s'): 1.0
    - heuristic(s): Manhattan distance (default) or misplaced-tile count; both admissible and consistent
    """
    def __init__(
        self,
        initial_board: Optional[Sequence[int]] = None,
        goal_board: Optional[Sequence[int]] = None,
        heuristic: str = "manhattan",
        size: int = 3,
    ):
        if heuristic == "default":
            heuristic = "manhattan"
        if heuristic not in ("manhattan", "misplaced"):
            raise ValueError(f"unknown heuristic {heuristic!r}")
        self.size = size
        self.goal = _validate(goal_board or ordered_goal(size), size, "goal_board")
        board = _validate(initial_board or self.goal, size, "initial_board")
        self.heuristic_type = heuristic
        self._goal_pos: Dict[int, Tuple[int, int]] = {v: divmod(i, size) for i, v in enumerate(self.goal)}
        self.initial_state = PuzzleState(board, board.index(0), board == self.goal)

    def get_actions(self, state: PuzzleState) -> List[PuzzleAction]:
        r, c = divmod(state.empty_index, self.size)
        actions = []
        for name, (direction, dr, dc) in _MOVES.items():
            nr, nc = r + dr, c + dc
            if 0 <= nr < self.size and 0 <= nc < self.size:
                actions.append(PuzzleAction(name, direction, nr * self.size + nc))
        return actions

    def get_result(self, state: PuzzleState, action: PuzzleAction) -> PuzzleState:
        b = list(state.board)
        b[state.empty_index], b[action.target_index] = b[action.target_index], b[state.empty_index]
        board = tuple(b)
        return PuzzleState(board, action.target_index, board == self.goal)

    def is_goal(self, state: PuzzleState) -> bool:
        return state.board == self.goal

    def get_cost(self, state: PuzzleState, action: PuzzleAction, next_state: PuzzleState) -> float:
        return 1.0

    def get_heuristic(self, state: PuzzleState) -> float:
        if self.heuristic_type == "misplaced":
            return float(sum(1 for v, g in zip(state.board, self.goal) if v != 0 and v != g))
        total = 0
        for i, v in enumerate(state.board):
            if v == 0:
                continue
            r, c = divmod(i, self.size)
            gr, gc = self._goal_pos[v]
            total += abs(r - gr) + abs(c - gc)
        return float(total)

    def board_of(self, state: PuzzleState) -> Board:
        return state.board

    def is_solvable(self) -> bool:
        """Parity test: odd widths need equal inversion parity; even widths also count the blank's row."""
        start = self.initial_state.board
        if self.size % 2 == 1:
            return inversions(start) % 2 == inversions(self.goal) % 2
        s_row = start.index(0) // self.size
        g_row = self.goal.index(0) // self.size
        return (inversions(start) + s_row) % 2 == (inversions(self.goal) + g_row) % 2


def make_eight_puzzle() -> EightPuzzle:
    # Example: five moves from the canonical goal
    return EightPuzzle(initial_board=(1, 2, 3, 4, 8, 0, 7, 6, 5), goal_board=DEFAULT_GOAL)
