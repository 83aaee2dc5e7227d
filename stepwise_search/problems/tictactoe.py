# stepwise_search/problems/tictactoe.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..core.problem import Problem

Cell = Optional[str]
Cells = Tuple[Cell, ...]

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
)


@dataclass(frozen=True)
class WinnerInfo:
    winner: str
    line: Tuple[int, int, int]


def winner_info(board: Sequence[Cell]) -> Optional[WinnerInfo]:
    for a, b, c in WINNING_LINES:
        if board[a] and board[a] == board[b] == board[c]:
            return WinnerInfo(board[a], (a, b, c))
    return None


def other(player: str) -> str:
    return "O" if player == "X" else "X"


@dataclass(frozen=True)
class TicTacToeState:
    board: Cells
    player_turn: str
    is_terminal: bool = False

    @property
    def key(self) -> str:
        return "".join(c or "-" for c in self.board)


@dataclass(frozen=True)
class TicTacToeAction:
    name: str
    index: int


def _state(board: Cells, to_move: str) -> TicTacToeState:
    done = winner_info(board) is not None or all(c is not None for c in board)
    return TicTacToeState(board, to_move, done)


class TicTacToe(Problem[TicTacToeState, TicTacToeAction]):
    """
    Two-player tic-tac-toe. X moves first; whoever is to move is derived from the piece count.

    Utilities are from max_player's point of view: +1 win, -1 loss, 0 draw or unfinished.
    max_player defaults to whoever is to move in the initial position, so the
    root of an adversarial search is always a maximizing node.
    """
    def __init__(self, initial_board: Optional[Sequence[Cell]] = None, max_player: Optional[str] = None):
        cells = tuple(initial_board) if initial_board is not None else (None,) * 9
        if len(cells) != 9 or any(c not in (None, "X", "O") for c in cells):
            raise ValueError(f"board must be 9 cells of None/'X'/'O', got {list(cells)}")
        placed = sum(1 for c in cells if c is not None)
        to_move = "X" if placed % 2 == 0 else "O"
        self.max_player = max_player or to_move
        if self.max_player not in ("X", "O"):
            raise ValueError(f"max_player must be 'X' or 'O', got {max_player!r}")
        self.initial_state = _state(cells, to_move)

    def get_actions(self, state: TicTacToeState) -> List[TicTacToeAction]:
        if state.is_terminal:
            return []
        return [TicTacToeAction(f"Place {state.player_turn} at {i}", i)
                for i, c in enumerate(state.board) if c is None]

    def get_result(self, state: TicTacToeState, action: TicTacToeAction) -> TicTacToeState:
        b = list(state.board)
        b[action.index] = state.player_turn
        return _state(tuple(b), other(state.player_turn))

    def is_goal(self, state: TicTacToeState) -> bool:
        return state.is_terminal

    def get_cost(self, state: TicTacToeState, action: TicTacToeAction, next_state: TicTacToeState) -> float:
        return 1.0

    def get_heuristic(self, state: TicTacToeState) -> float:
        return 0.0

    def get_utility(self, state: TicTacToeState, player: int = 0) -> float:
        info = winner_info(state.board)
        if info is None:
            return 0.0
        return 1.0 if info.winner == self.max_player else -1.0

    def is_max_turn(self, state: TicTacToeState) -> bool:
        return state.player_turn == self.max_player

    def board_of(self, state: TicTacToeState) -> Cells:
        return state.board
