# stepwise_search/core/metrics.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional
import time, tracemalloc


@dataclass
class SearchMetrics:
    """Counters every step-wise algorithm keeps, independent of its internals."""
    nodes_explored: int
    current_depth: int
    status: str


@dataclass
class SearchResult:
    algo: str
    success: bool
    actions: List[str]
    cost: float
    nodes_explored: int
    steps: int
    time_s: float
    peak_kb: int
    error: Optional[str] = None

    def to_row(self) -> Dict[str, Any]:
        return asdict(self)


class MeasuredRun:
    """
    Wall time and tracemalloc peak around one search run.

    Nested runs share the outer trace: only the run that started tracemalloc
    stops it, and an inner run reports the peak since it reset the counter.
    .elapsed and .peak_kb can be read inside the with-block.
    """
    def __init__(self) -> None:
        self.t0: Optional[float] = None
        self.t1: Optional[float] = None
        self._peak_kb: int = 0
        self._tracing: bool = False
        self._owns_trace: bool = False

    def __enter__(self) -> "MeasuredRun":
        self._owns_trace = not tracemalloc.is_tracing()
        if self._owns_trace:
            tracemalloc.start()
        else:
            tracemalloc.reset_peak()
        self._tracing = True
        self.t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.t1 = time.perf_counter()
        _, peak = tracemalloc.get_traced_memory()
        if self._owns_trace:
            tracemalloc.stop()
        self._tracing = False
        self._peak_kb = max(self._peak_kb, peak // 1024)
        return False

    @property
    def elapsed(self) -> float:
        if self.t0 is None:
            return 0.0
        end = self.t1 if self.t1 is not None else time.perf_counter()
        return end - self.t0

    @property
    def peak_kb(self) -> int:
        if self._tracing:
            _, peak = tracemalloc.get_traced_memory()
            return max(self._peak_kb, peak // 1024)
        return self._peak_kb
