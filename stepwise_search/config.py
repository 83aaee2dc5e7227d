# stepwise_search/config.py
# Search settings shared by the algorithm registry and the benchmark runner.
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

HEURISTIC_TYPES = ("default", "manhattan", "misplaced")


def _env_int(name: str, default: str) -> int:
    return int(os.getenv(name, default))


def _env_float(name: str, default: str) -> float:
    return float(os.getenv(name, default))


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class SearchSettings:
    """
    Knobs a driver may expose for a simulation.

    max_depth: minimax depth cutoff.
    mcts_iterations / mcts_exploration / rollout_depth: MCTS budget, UCB1 constant, rollout bound.
    use_alpha_beta: registry default for "minimax" (the "alpha-beta" key always prunes).
    heuristic_type: 8-puzzle heuristic ("default" means manhattan).
    max_allowed_depth: IDS safety bound.
    ida_max_iterations: IDA* node budget.
    seed: MCTS rollout seed (None = nondeterministic).
    """
    max_depth: int = 10
    mcts_iterations: int = 100
    mcts_exploration: float = 1.414
    use_alpha_beta: bool = False
    heuristic_type: str = "default"
    max_allowed_depth: int = 50
    ida_max_iterations: int = 5000
    rollout_depth: int = 50
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.heuristic_type not in HEURISTIC_TYPES:
            raise ValueError(f"heuristic_type must be one of {HEURISTIC_TYPES}, got {self.heuristic_type!r}")
        if self.max_depth < 0 or self.max_allowed_depth < 0:
            raise ValueError("depth limits must be non-negative")
        if self.mcts_iterations < 0 or self.ida_max_iterations < 0:
            raise ValueError("iteration budgets must be non-negative")

    @classmethod
    def from_env(cls) -> "SearchSettings":
        """Tunables overridable via STEPWISE_* environment variables."""
        seed = os.getenv("STEPWISE_SEED")
        return cls(
            max_depth=_env_int("STEPWISE_MAX_DEPTH", "10"),
            mcts_iterations=_env_int("STEPWISE_MCTS_ITERATIONS", "100"),
            mcts_exploration=_env_float("STEPWISE_MCTS_EXPLORATION", "1.414"),
            use_alpha_beta=_env_bool("STEPWISE_ALPHA_BETA", "false"),
            heuristic_type=os.getenv("STEPWISE_HEURISTIC", "default"),
            max_allowed_depth=_env_int("STEPWISE_MAX_ALLOWED_DEPTH", "50"),
            ida_max_iterations=_env_int("STEPWISE_IDA_MAX_ITERATIONS", "5000"),
            rollout_depth=_env_int("STEPWISE_ROLLOUT_DEPTH", "50"),
            seed=int(seed) if seed not in (None, "") else None,
        )
