# simulations/methods.py

from __future__ import annotations

import logging
import random
from typing import Callable, Dict

from .common import BatchResult, ExperimentSpec, shard_seed

from prisoners_problem.permutation import place_boxes
from prisoners_problem.strategies import (
    CYCLE_FOLLOWING,
    RANDOM_SAMPLING,
    StrategyFn,
    get_strategy,
)
from prisoners_problem.trace import NULL_TRACE, LoggingTrace, TraceRecorder


logger = logging.getLogger(__name__)


def simulate_trials(
    strategy: StrategyFn,
    spec: ExperimentSpec,
    trials: int,
    rng: random.Random,
    trace: TraceRecorder = NULL_TRACE,
) -> int:
    """
    Tight trial loop: fresh permutation, evaluate every prisoner, count
    the trials where all of them found their number.

    rng is used both for box placement and by the strategy itself, and
    must not be shared with another running loop.
    """
    successes = 0
    for _ in range(trials):
        perm = place_boxes(spec.prisoners, rng)
        if strategy(perm, spec.open_budget, rng, trace):
            successes += 1
    return successes


def run_batch(method: str, spec: ExperimentSpec, shard: int, trials: int) -> BatchResult:
    """
    One worker's share of a strategy's trials.

    Module-level so it can be shipped to a process pool. The shard owns
    its RNG (seeded from spec.seed and the shard index) and its counter.
    """
    strategy = get_strategy(method)
    rng = random.Random(shard_seed(spec.seed, shard))
    trace: TraceRecorder = LoggingTrace() if spec.debug else NULL_TRACE

    successes = simulate_trials(strategy, spec, trials, rng, trace)
    logger.debug(
        "[%s] shard %d finished: %d/%d trials succeeded",
        method, shard, successes, trials,
    )
    return BatchResult(method=method, shard=shard, trials=trials, successes=successes)


def simulate_cycle_following(spec: ExperimentSpec, shard: int = 0) -> BatchResult:
    """
    Every prisoner follows the chain of numbers starting at their own box.
    """
    return run_batch(CYCLE_FOLLOWING, spec, shard, spec.trials)


def simulate_random_sampling(spec: ExperimentSpec, shard: int = 0) -> BatchResult:
    """
    Every prisoner opens boxes uniformly at random, without repeats.
    """
    return run_batch(RANDOM_SAMPLING, spec, shard, spec.trials)


# --- Registry / dispatch -----------------------------------------------------

def get_method(name: str) -> Callable[..., BatchResult]:
    name = name.strip().lower()
    if name not in METHODS:
        raise ValueError(f"unknown method '{name}'. Available: {sorted(METHODS.keys())}")
    return METHODS[name]


# METHODS maps method name -> single-shard simulation over all of spec.trials.
METHODS: Dict[str, Callable[..., BatchResult]] = {
    CYCLE_FOLLOWING: simulate_cycle_following,
    RANDOM_SAMPLING: simulate_random_sampling,
}
