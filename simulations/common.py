# simulations/common.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import math
import time


class ConfigError(ValueError):
    """Raised for an experiment configuration that cannot produce meaningful rates."""


@dataclass(frozen=True)
class ExperimentSpec:
    """
    Common experiment parameters shared across all simulations.
    Validated once, at construction.
    """
    prisoners: int
    trials: int
    open_budget: Optional[int] = None  # None -> prisoners // 2
    workers: int = 1  # independent shards per strategy, each with its own RNG
    seed: Optional[int] = 42
    debug: bool = False  # per-prisoner trace at DEBUG level

    def __post_init__(self) -> None:
        if self.prisoners <= 0:
            raise ConfigError(f"prisoners must be > 0, got {self.prisoners}")
        if self.open_budget is None:
            object.__setattr__(self, "open_budget", self.prisoners // 2)
        if self.open_budget < 0:
            raise ConfigError(f"open_budget must be >= 0, got {self.open_budget}")
        if self.open_budget > self.prisoners:
            raise ConfigError(
                f"open_budget ({self.open_budget}) cannot exceed prisoners ({self.prisoners})"
            )
        if self.trials <= 0:
            raise ConfigError(f"trials must be > 0, got {self.trials}")
        if self.workers <= 0:
            raise ConfigError(f"workers must be > 0, got {self.workers}")


def shard_sizes(trials: int, workers: int) -> List[int]:
    """
    Split trials into `workers` contiguous shards whose sizes differ by at
    most one. Empty shards are dropped.
    """
    base, extra = divmod(trials, workers)
    sizes = [base + (1 if i < extra else 0) for i in range(workers)]
    return [s for s in sizes if s > 0]


def shard_seed(seed: Optional[int], shard: int) -> Optional[int]:
    """Per-shard seed; None keeps the shard unseeded."""
    if seed is None:
        return None
    return seed + 1000 * (shard + 1)


@dataclass(frozen=True)
class BatchResult:
    """
    Outcome of one worker's shard of trials.
    """
    method: str
    shard: int
    trials: int
    successes: int


@dataclass
class ExperimentResult:
    """
    Common return type for all simulations.
    """
    method: str
    spec: ExperimentSpec
    successes: int
    trials: int

    runtime_s: Optional[float] = None
    expected_rate: Optional[float] = None  # analytic, in percent
    meta: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Sanity: every configured trial ran exactly once
        if self.trials != self.spec.trials:
            raise ValueError(
                f"trial count mismatch: expected {self.spec.trials}, got {self.trials}"
            )
        if self.successes < 0 or self.successes > self.trials:
            raise ValueError(
                f"successes must be in [0, {self.trials}], got {self.successes}"
            )

    @property
    def rate(self) -> float:
        """Success rate in percent."""
        return self.successes / self.trials * 100.0

    @property
    def std_error(self) -> float:
        """Binomial standard error of `rate`, in percentage points."""
        p = self.successes / self.trials
        return math.sqrt(p * (1.0 - p) / self.trials) * 100.0


def combine_batches(batches: List[BatchResult]) -> Tuple[int, int]:
    """
    Sum shard counters. Order does not matter.
    Returns (successes, trials).
    """
    successes = 0
    trials = 0
    for b in batches:
        successes += b.successes
        trials += b.trials
    return successes, trials


class Timer:
    """
    Tiny timing helper for simulations.
    Usage:
        with Timer() as t:
            ...
        elapsed = t.elapsed_s
    """
    def __init__(self) -> None:
        self._start: Optional[float] = None
        self.elapsed_s: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.time()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._start is not None:
            self.elapsed_s = time.time() - self._start


def format_rate_line(r: ExperimentResult) -> str:
    """
    Human-friendly one-liner for printing in compare tools.
    """
    return (
        f"{r.method}: success rate={r.rate}% ({r.successes}/{r.trials})"
        + (f", expected~{r.expected_rate:.4f}%" if r.expected_rate is not None else "")
        + (f", runtime={r.runtime_s:.3f}s" if r.runtime_s is not None else "")
    )
