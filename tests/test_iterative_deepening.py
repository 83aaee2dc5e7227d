"""IDS and IDA*: restart behaviour, limits and presentation persistence."""

import math

from stepwise_search.algorithms.ida_star import IDAStarSearch
from stepwise_search.algorithms.ids import IterativeDeepeningSearch
from stepwise_search.core.algorithm import SearchStatus
from stepwise_search.problems.custom_tree import CustomTreeProblem


class TestIDS:
    def test_limits_grow_until_goal(self, sample_tree):
        algo = IterativeDeepeningSearch(sample_tree)
        goal = algo.run()
        assert algo.status is SearchStatus.COMPLETED
        assert goal.state.key == "G1"
        assert algo.current_limit == 2
        assert algo.iterations == 3
        # S | S A B | S A G1
        assert algo.nodes_explored == 7
        assert algo.max_path_length <= algo.current_limit + 1

    def test_first_iteration_is_root_only(self, sample_tree):
        algo = IterativeDeepeningSearch(sample_tree)
        algo.step()
        assert algo.current_limit == 0
        assert len(algo.stack) == 0
        algo.step()
        assert algo.current_limit == 1
        assert algo.iterations == 2

    def test_structure_survives_restart(self, sample_tree):
        algo = IterativeDeepeningSearch(sample_tree)
        algo.run()
        root = algo.tree()
        b = root.find("B")
        assert b is not None
        # B was visited in iteration 2 only; iteration 3 cleared the flag
        assert b.is_visited is False
        assert root.find("G1").is_current is True
        assert sum(1 for n in root.walk() if n.is_current) == 1

    def test_authored_tree_is_cloned(self, sample_tree):
        IterativeDeepeningSearch(sample_tree).run()
        assert all(n.is_visited is None for n in sample_tree.authored_root.walk())

    def test_fails_when_space_exhausted(self):
        problem = CustomTreeProblem.from_dict({
            "id": "s", "name": "S", "children": [{"id": "a", "name": "A", "children": []}],
        })
        algo = IterativeDeepeningSearch(problem)
        algo.run()
        assert algo.status is SearchStatus.FAILED
        assert algo.current_limit == 1

    def test_fails_past_max_allowed_depth(self, sample_tree):
        algo = IterativeDeepeningSearch(sample_tree, max_allowed_depth=1)
        algo.run()
        assert algo.status is SearchStatus.FAILED
        assert algo.goal_node is None

    def test_limit_climbs_to_max_allowed_depth(self):
        # s -> n1 -> ... -> n4 -> goal at depth 5
        node = {"id": "goal", "name": "Goal", "isGoal": True, "children": []}
        for i in range(4, 0, -1):
            node = {"id": f"n{i}", "name": f"N{i}", "children": [node]}
        problem = CustomTreeProblem.from_dict({"id": "s", "name": "S", "children": [node]})
        algo = IterativeDeepeningSearch(problem, max_allowed_depth=3)
        algo.run()
        assert algo.status is SearchStatus.FAILED
        assert algo.goal_node is None
        assert algo.current_limit == 4
        assert algo.iterations == 4
        # limits 0..3 pop 1 + 2 + 3 + 4 nodes
        assert algo.nodes_explored == 10
        assert algo.max_path_length == 4
        assert algo.step() is None

    def test_generated_ids_for_puzzle(self, puzzle):
        algo = IterativeDeepeningSearch(puzzle)
        goal = algo.run()
        assert goal.depth == 5
        assert algo.current_limit == 5
        assert algo.tree().find("root-Move_Down") is not None
        assert algo.attributes()["Current Depth Limit"] == 5


class TestIDAStar:
    def test_initial_threshold_is_root_heuristic(self):
        problem = CustomTreeProblem.from_dict({"id": "r", "name": "R", "value": 5, "children": []})
        algo = IDAStarSearch(problem)
        assert algo.threshold == 5.0
        assert algo.thresholds == [5.0]
        algo.run()
        assert algo.status is SearchStatus.FAILED

    def test_thresholds_rise_to_optimal_cost(self, sample_tree):
        algo = IDAStarSearch(sample_tree)
        goal = algo.run()
        assert algo.status is SearchStatus.COMPLETED
        assert goal.state.key == "G2"
        assert goal.path_cost == 5.0
        assert algo.thresholds == [4.0, 5.0]

    def test_pruned_node_is_annotated(self, sample_tree):
        algo = IDAStarSearch(sample_tree)
        algo.run()
        g1 = algo.tree().find("G1")
        assert g1.is_pruned is True
        assert g1.pruning_triggered_by == "f(6) > limit(5)"

    def test_next_limit_attribute(self, sample_tree):
        algo = IDAStarSearch(sample_tree)
        assert algo.attributes()["Next f-limit"] == "∞"
        algo.run(max_steps=3)
        # S, A expanded; G1 popped with f = 6
        assert algo.next_threshold == 6.0
        assert algo.attributes()["Current f-limit (Threshold)"] == "4"

    def test_node_budget(self, sample_tree):
        algo = IDAStarSearch(sample_tree, max_iterations=1)
        algo.run()
        assert algo.status is SearchStatus.FAILED
        assert algo.nodes_explored == 1

    def test_solves_puzzle_in_one_pass(self, puzzle):
        algo = IDAStarSearch(puzzle)
        goal = algo.run()
        assert goal.path_cost == 5.0
        assert algo.thresholds == [5.0]
        assert all(t <= u for t, u in zip(algo.thresholds, algo.thresholds[1:]))
        assert not math.isinf(algo.threshold)
