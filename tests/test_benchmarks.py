"""Benchmark runner rows and the matplotlib comparison charts."""

import math

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from stepwise_search.algorithms.mcts import MonteCarloTreeSearch
from stepwise_search.benchmarks.plot_results import fmt_table
from stepwise_search.benchmarks.run_all import run_one
from stepwise_search.core.metrics import MeasuredRun
from stepwise_search.plots.plotting import bar_compare, mcts_visits
from stepwise_search.problems.custom_tree import CustomTreeProblem, make_sample_tree


class TestRunner:
    def test_run_one_success(self):
        r = run_one("ucs", make_sample_tree())
        assert r.success
        assert r.algo == "UCS"
        assert r.actions == ["Go to B", "Go to G2"]
        assert r.cost == 5.0
        assert r.nodes_explored == 4
        assert r.error is None
        row = r.to_row()
        assert set(row) >= {"algo", "success", "cost", "nodes_explored", "steps", "time_s", "peak_kb"}

    def test_run_one_failure(self):
        problem = CustomTreeProblem.from_dict({"id": "s", "name": "S", "children": []})
        r = run_one("bfs", problem)
        assert not r.success
        assert math.isnan(r.cost)
        assert r.actions == []

    def test_measured_run(self):
        with MeasuredRun() as m:
            sum(range(1000))
        assert m.elapsed >= 0.0
        assert m.peak_kb >= 0

    def test_markdown_table(self):
        rows = [run_one(k, make_sample_tree()).to_row() for k in ("bfs", "astar")]
        table = fmt_table(rows)
        lines = table.splitlines()
        assert lines[0].startswith("| Algorithm |")
        assert lines[2].startswith("| BFS | 6.000000 | 4 |")
        assert len(lines) == 4


class TestPlots:
    def test_bar_compare(self):
        results = [run_one(k, make_sample_tree()) for k in ("bfs", "ucs", "ids")]
        fig = bar_compare(results, title="sample tree")
        assert len(fig.axes) == 4
        assert fig.axes[0].get_title() == "Nodes Explored"
        plt.close(fig)

    def test_mcts_visits(self, x_to_win):
        algo = MonteCarloTreeSearch(x_to_win, iterations=20, seed=0)
        algo.run()
        fig = mcts_visits(algo)
        heights = [p.get_height() for p in fig.axes[0].patches]
        assert sum(heights) == 20
        plt.close(fig)
