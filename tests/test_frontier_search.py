"""Frontier search (BFS/DFS/UCS/Greedy/A*) and the shared step/run/reset contract."""

from dataclasses import dataclass

import pytest

from stepwise_search.algorithms.astar import a_star_search
from stepwise_search.algorithms.bfs import breadth_first_search
from stepwise_search.algorithms.dfs import depth_first_search
from stepwise_search.algorithms.frontier import FrontierSearch
from stepwise_search.algorithms.greedy import greedy_best_first_search
from stepwise_search.algorithms.ucs import uniform_cost_search
from stepwise_search.core.algorithm import SearchStatus
from stepwise_search.core.frontiers import Frontier
from stepwise_search.core.node import SearchNode
from stepwise_search.core.utils import path_states, reconstruct_path
from stepwise_search.problems.custom_tree import CustomTreeProblem


def _current_count(root):
    return sum(1 for n in root.walk() if n.is_current)


@dataclass(frozen=True)
class _Key:
    key: str
    is_terminal: bool = False


class TestFrontier:
    """Ordering and replacement rules of the list frontier."""

    def test_fifo_without_key(self):
        f = Frontier()
        for k in "abc":
            f.push(SearchNode(_Key(k)))
        assert [f.pop().state.key for _ in range(3)] == ["a", "b", "c"]

    def test_lowest_key_first_ties_by_insertion(self):
        f = Frontier(key=lambda n: n.path_cost)
        f.push(SearchNode(_Key("a"), path_cost=2.0))
        f.push(SearchNode(_Key("b"), path_cost=1.0))
        f.push(SearchNode(_Key("c"), path_cost=1.0))
        assert [f.pop().state.key for _ in range(3)] == ["b", "c", "a"]

    def test_offer_replaces_only_when_strictly_better(self):
        f = Frontier(key=lambda n: n.path_cost)
        old = SearchNode(_Key("s"), path_cost=5.0)
        assert f.offer(old)
        assert not f.offer(SearchNode(_Key("s"), path_cost=5.0))
        assert f.get("s") is old
        better = SearchNode(_Key("s"), path_cost=3.0)
        assert f.offer(better)
        assert len(f) == 1
        assert f.get("s") is better
        assert "s" in f

    def test_fifo_never_replaces(self):
        f = Frontier()
        f.offer(SearchNode(_Key("s"), path_cost=5.0))
        assert not f.offer(SearchNode(_Key("s"), path_cost=1.0))
        assert len(f) == 1


class TestEightPuzzle:
    def test_bfs_finds_optimal_five_moves(self, puzzle):
        algo = breadth_first_search(puzzle)
        goal = algo.run()
        assert algo.status is SearchStatus.COMPLETED
        assert goal is algo.goal_node
        assert goal.depth == 5
        actions, cost = reconstruct_path(goal)
        assert cost == 5.0
        assert actions == goal.solution()
        assert len(actions) == 5
        assert path_states(goal)[-1] == "1,2,3,4,5,6,7,8,0"

    def test_ucs_and_astar_agree_on_cost(self, puzzle):
        ucs = uniform_cost_search(puzzle)
        ucs.run()
        astar = a_star_search(puzzle)
        astar.run()
        assert ucs.goal_node.path_cost == astar.goal_node.path_cost == 5.0
        assert astar.nodes_explored <= ucs.nodes_explored
        # consistent h: no state is expanded twice
        assert len(set(astar.expansion_order)) == len(astar.expansion_order)

    def test_greedy_reaches_goal(self, puzzle):
        algo = greedy_best_first_search(puzzle)
        algo.run()
        assert algo.status is SearchStatus.COMPLETED
        assert puzzle.is_goal(algo.goal_node.state)

    def test_presentation_carries_boards(self, puzzle):
        algo = breadth_first_search(puzzle)
        algo.step()
        root = algo.tree()
        assert root.id == "root"
        assert root.name == "Start"
        assert root.to_dict()["boardState"] == [1, 2, 3, 4, 8, 0, 7, 6, 5]
        assert [c.name for c in root.children] == ["Move Up", "Move Down", "Move Left"]
        assert root.children[0].id == "root-Move_Up"
        assert root.children[0].cost_to_parent == 1.0


class TestSampleTree:
    """S -(1)-> A -(5)-> G1, S -(4)-> B -(1)-> G2."""

    def test_ucs_order_and_cost(self, sample_tree):
        algo = uniform_cost_search(sample_tree)
        goal = algo.run()
        assert algo.expansion_order == ["S", "A", "B"]
        assert goal.state.key == "G2"
        assert goal.path_cost == 5.0
        assert goal.solution() == ["Go to B", "Go to G2"]
        assert algo.nodes_explored == 4

    def test_astar_same_order_and_cost(self, sample_tree):
        algo = a_star_search(sample_tree)
        goal = algo.run()
        assert algo.expansion_order == ["S", "A", "B"]
        assert goal.path_cost == 5.0

    def test_bfs_takes_fewest_edges_not_cheapest(self, sample_tree):
        goal = breadth_first_search(sample_tree).run()
        assert goal.state.key == "G1"
        assert goal.path_cost == 6.0

    def test_dfs_goes_deep_on_first_branch(self, sample_tree):
        algo = depth_first_search(sample_tree)
        goal = algo.run()
        assert goal.state.key == "G1"
        assert algo.expansion_order == ["S", "A"]

    def test_greedy_follows_heuristic(self, sample_tree):
        algo = greedy_best_first_search(sample_tree)
        goal = algo.run()
        assert goal.state.key == "G2"
        assert algo.expansion_order == ["S", "B"]

    def test_presentation_uses_authored_ids(self, sample_tree):
        algo = uniform_cost_search(sample_tree)
        algo.run()
        root = algo.tree()
        assert root.id == "S"
        assert {n.id for n in root.walk()} == {"S", "A", "B", "G1", "G2"}
        g2 = root.find("G2")
        assert g2.is_goal is True
        assert g2.cost_to_parent == 1.0
        assert g2.is_current is True
        assert _current_count(root) == 1

    def test_authored_tree_untouched(self, sample_tree):
        uniform_cost_search(sample_tree).run()
        assert all(n.is_visited is None and n.is_current is None for n in sample_tree.authored_root.walk())

    def test_attributes(self, sample_tree):
        algo = uniform_cost_search(sample_tree)
        algo.step()
        attrs = algo.attributes()
        assert attrs["Algorithm"] == "UCS"
        assert attrs["Open List (Frontier)"] == ["A (f=4.0)", "B (f=5.0)"]
        assert attrs["Closed List (Explored)"] == ["S"]
        assert attrs["Total Visited"] == 1


class TestStepContract:
    def test_status_transitions(self, sample_tree):
        algo = breadth_first_search(sample_tree)
        assert algo.status is SearchStatus.IDLE
        algo.step()
        assert algo.status is SearchStatus.RUNNING
        algo.run()
        assert algo.status is SearchStatus.COMPLETED
        steps = algo.steps_taken
        assert algo.step() is None
        assert algo.steps_taken == steps

    def test_run_respects_max_steps(self, sample_tree):
        algo = uniform_cost_search(sample_tree)
        algo.run(max_steps=2)
        assert algo.status is SearchStatus.RUNNING
        assert algo.nodes_explored == 2

    def test_exhausted_frontier_fails(self):
        problem = CustomTreeProblem.from_dict({
            "id": "s", "name": "S", "children": [{"id": "a", "name": "A", "children": []}],
        })
        algo = breadth_first_search(problem)
        assert algo.run() is not None
        assert algo.status is SearchStatus.FAILED
        assert algo.goal_node is None
        assert algo.metrics().status == "FAILED"

    def test_at_most_one_current_node(self, sample_tree):
        algo = breadth_first_search(sample_tree)
        while not algo.is_finished:
            algo.step()
            assert _current_count(algo.tree()) <= 1

    def test_reset_reproduces_run(self, sample_tree):
        algo = a_star_search(sample_tree)
        algo.run()
        first = (algo.tree().to_dict(), algo.expansion_order[:], algo.nodes_explored)
        algo.reset()
        assert algo.status is SearchStatus.IDLE
        assert algo.nodes_explored == 0
        assert algo.steps_taken == 0
        assert algo.tree().children == []
        algo.run()
        assert (algo.tree().to_dict(), algo.expansion_order, algo.nodes_explored) == first

    def test_broken_cost_raises(self, sample_tree):
        class NoCost(CustomTreeProblem):
            def get_cost(self, state, action, next_state):
                return None

        algo = FrontierSearch(NoCost(sample_tree.authored_root))
        with pytest.raises(ValueError, match="get_cost returned None"):
            algo.run()


@dataclass(frozen=True)
class _Edge:
    name: str
    target: str


class _Diamond:
    """S -> A -> C -> G and S -> B -> C: C is reachable along two edges."""
    EDGES = {"S": [("A", 1.0), ("B", 2.0)], "A": [("C", 5.0)], "B": [("C", 1.0)], "C": [("G", 1.0)], "G": []}

    def __init__(self):
        self.initial_state = _Key("S")

    def get_actions(self, state):
        return [_Edge(f"to {t}", t) for t, _ in self.EDGES[state.key]]

    def get_result(self, state, action):
        return _Key(action.target, action.target == "G")

    def is_goal(self, state):
        return state.key == "G"

    def get_cost(self, state, action, next_state):
        return dict(self.EDGES[state.key])[next_state.key]

    def get_heuristic(self, state):
        return 0.0


class TestSharedStates:
    def test_bfs_draws_edge_into_queued_state(self):
        algo = breadth_first_search(_Diamond())
        goal = algo.run()
        assert goal.solution() == ["to A", "to C", "to G"]
        root = algo.tree()
        b = root.child("root-to_B")
        assert [c.id for c in b.children] == ["root-to_B-to_C"]
        # only the copy under A was expanded
        assert b.children[0].children == []
        assert root.find("root-to_A-to_C-to_G").is_current is True
        assert algo.expansion_order == ["S", "A", "B", "C"]

    def test_ucs_expands_the_cheaper_copy(self):
        algo = uniform_cost_search(_Diamond())
        goal = algo.run()
        assert goal.path_cost == 4.0
        assert goal.solution() == ["to B", "to C", "to G"]
        root = algo.tree()
        assert root.find("root-to_A-to_C").children == []
        assert [c.id for c in root.find("root-to_B-to_C").children] == ["root-to_B-to_C-to_G"]
        assert _current_count(root) == 1
