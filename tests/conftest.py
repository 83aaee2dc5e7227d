"""Shared pytest fixtures for stepwise_search tests."""

import pytest

from stepwise_search.problems.custom_tree import SAMPLE_TREE, CustomTreeProblem
from stepwise_search.problems.eight_puzzle import make_eight_puzzle
from stepwise_search.problems.tictactoe import TicTacToe


def _leaf(node_id, value):
    return {"id": node_id, "name": node_id.upper(), "value": value, "children": []}


# Textbook two-ply game: minimax value 3; alpha-beta prunes b2 and b3.
GAME_TREE = {
    "id": "r", "name": "R", "children": [
        {"id": "a", "name": "A", "children": [_leaf("a1", 3), _leaf("a2", 12), _leaf("a3", 8)]},
        {"id": "b", "name": "B", "children": [_leaf("b1", 2), _leaf("b2", 4), _leaf("b3", 6)]},
        {"id": "c", "name": "C", "children": [_leaf("c1", 14), _leaf("c2", 5), _leaf("c3", 2)]},
    ],
}


@pytest.fixture
def sample_tree():
    """Five-node weighted tree: S -(1)-> A -(5)-> G1, S -(4)-> B -(1)-> G2."""
    return CustomTreeProblem.from_dict(SAMPLE_TREE)


@pytest.fixture
def game_tree():
    return CustomTreeProblem.from_dict(GAME_TREE)


@pytest.fixture
def puzzle():
    """[1,2,3,4,8,0,7,6,5]: five moves from the goal."""
    return make_eight_puzzle()


@pytest.fixture
def x_to_win():
    """X to move with an immediate win at cell 2."""
    return TicTacToe(["X", "X", None, "O", "O", None, None, None, None])
