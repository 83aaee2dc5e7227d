# stepwise_search/plots/plotting.py
# Bar-chart comparison of SearchResult rows: nodes explored, path cost, time and peak memory in a 2x2 grid.
from __future__ import annotations
import math
import matplotlib.pyplot as plt


def bar_compare(results, title="Search Comparison"):
    names = [r.algo for r in results]
    nodes = [r.nodes_explored for r in results]
    costs = [0 if math.isnan(r.cost) else r.cost for r in results]
    times = [r.time_s for r in results]
    mems  = [r.peak_kb or 0 for r in results]

    fig, axs = plt.subplots(2, 2, figsize=(11, 8))
    axs = axs.ravel()
    axs[0].bar(names, nodes); axs[0].set_title("Nodes Explored"); axs[0].tick_params(axis='x', rotation=45)
    axs[1].bar(names, costs); axs[1].set_title("Path Cost"); axs[1].tick_params(axis='x', rotation=45)
    axs[2].bar(names, times); axs[2].set_title("Time (s)"); axs[2].tick_params(axis='x', rotation=45)
    axs[3].bar(names, mems); axs[3].set_title("Peak Memory (KB)"); axs[3].tick_params(axis='x', rotation=45)
    fig.suptitle(title)
    fig.tight_layout(rect=[0, 0, 1, 0.95])
    return fig


def mcts_visits(algo, title="MCTS root visits"):
    """Visit counts of the root's children; the tallest bar is the recommended move."""
    children = algo.root.children
    names = [c.node.action.name for c in children]
    visits = [c.visits for c in children]
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.bar(names, visits)
    ax.set_title(title)
    ax.set_ylabel("visits")
    ax.tick_params(axis='x', rotation=45)
    fig.tight_layout()
    return fig
