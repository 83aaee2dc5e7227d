# stepwise_search/benchmarks/run_all.py
from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Callable, List, Tuple

from ..algorithms.registry import PATH_ALGORITHMS, build
from ..config import SearchSettings
from ..core.metrics import MeasuredRun, SearchResult
from ..core.problem import Problem
from ..core.utils import reconstruct_path
from ..problems.custom_tree import make_sample_tree
from ..problems.eight_puzzle import EightPuzzle, make_eight_puzzle

# ---- Tunables (overridable via STEPWISE_* environment variables) ------------
SETTINGS = SearchSettings.from_env()
MAX_STEPS = 200_000  # hard cap per run so a bad configuration cannot hang the runner


# ---- Helpers ----------------------------------------------------------------
def _fmt_time(x):
    return "n/a" if x is None else f"{float(x):.4f}"


def _load_problems() -> List[Tuple[str, Callable[[], Problem]]]:
    heuristic = SETTINGS.heuristic_type

    def puzzle() -> EightPuzzle:
        p = make_eight_puzzle()
        return EightPuzzle(p.initial_state.board, p.goal, heuristic=heuristic)

    return [("8-puzzle", puzzle), ("sample tree", make_sample_tree)]


def run_one(key: str, problem: Problem, settings: SearchSettings = SETTINGS) -> SearchResult:
    """Drive one algorithm to completion step by step inside MeasuredRun."""
    algo = build(key, problem, settings)
    with MeasuredRun() as m:
        algo.run(max_steps=MAX_STEPS)
    goal = getattr(algo, "goal_node", None)
    actions, cost = reconstruct_path(goal) if goal is not None else ([], float("nan"))
    return SearchResult(
        algo=algo.name,
        success=goal is not None,
        actions=actions,
        cost=cost,
        nodes_explored=algo.nodes_explored,
        steps=algo.steps_taken,
        time_s=m.elapsed,
        peak_kb=m.peak_kb,
        error=None if algo.is_finished else f"stopped after {MAX_STEPS} steps",
    )


def main():
    out = {"ts": time.time(), "problems": {}}
    for pname, make in _load_problems():
        print(f"== {pname} ==")
        rows = []
        for key in PATH_ALGORITHMS:
            print(f"→ Running {key} ...")
            r = run_one(key, make())
            print(
                f"  {r.algo}: "
                f"{'OK' if r.success else 'FAIL'} "
                f"cost={r.cost} "
                f"explored={r.nodes_explored}, "
                f"steps={r.steps}, "
                f"time={_fmt_time(r.time_s)}s"
            )
            rows.append(r.to_row())
        out["problems"][pname] = rows

    # Save JSON next to this script
    out_path = Path(__file__).with_name("results.json")
    out_path.write_text(json.dumps(out, indent=2))
    print(f"Wrote {out_path}")


if __name__ == "__main__":
    main()
