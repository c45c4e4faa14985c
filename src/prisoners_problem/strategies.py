from __future__ import annotations

import random
from typing import Callable, Dict, Iterator, Sequence

from .trace import NULL_TRACE, NullTrace, TraceEvent, TraceRecorder


# (permutation, open_budget, rng, trace) -> did every prisoner find their number?
StrategyFn = Callable[[Sequence[int], int, random.Random, TraceRecorder], bool]


CYCLE_FOLLOWING = "cycle_following"
RANDOM_SAMPLING = "random_sampling"


# ------------------------------------------------------------
# Single prisoner
# ------------------------------------------------------------

def cycle_following_prisoner(
    perm: Sequence[int],
    prisoner: int,
    open_budget: int,
    trace: TraceRecorder = NULL_TRACE,
) -> bool:
    """
    Open box #prisoner first, then always the box named by the number
    just found, for at most open_budget boxes.

    The prisoner succeeds iff the cycle through their own box has
    length <= open_budget. The walk ends early once it comes back to the
    starting box; that cannot happen before the match since the box
    pointing back to the start is the one holding the prisoner's number.
    """
    tracing = not isinstance(trace, NullTrace)
    decision = prisoner

    for attempt in range(1, open_budget + 1):
        value = perm[decision]
        if tracing:
            trace.record(TraceEvent(CYCLE_FOLLOWING, prisoner, attempt, decision, value))
        if value == prisoner:
            return True
        decision = value
        if decision == prisoner:
            break

    return False


def sample_boxes(n: int, k: int, rng: random.Random) -> Iterator[int]:
    """
    Yield up to k distinct box indices from range(n), uniformly without
    replacement.

    Partial Fisher-Yates: the chosen index is swapped to the tail and the
    live pool shrinks by one, so each draw is uniform over what is left.
    Lazy, so a caller that stops early draws no more randomness.
    """
    if k < 0 or k > n:
        raise ValueError("k must be in [0, n]")

    pool = list(range(n))
    for draw in range(k):
        live = n - draw
        j = rng.randrange(live)
        box = pool[j]
        pool[j] = pool[live - 1]
        pool[live - 1] = box
        yield box


def random_sampling_prisoner(
    perm: Sequence[int],
    prisoner: int,
    open_budget: int,
    rng: random.Random,
    trace: TraceRecorder = NULL_TRACE,
) -> bool:
    """
    Open open_budget boxes chosen uniformly at random, never the same box
    twice. Each prisoner starts from a fresh pool of all boxes.
    """
    tracing = not isinstance(trace, NullTrace)

    for attempt, box in enumerate(sample_boxes(len(perm), open_budget, rng), start=1):
        value = perm[box]
        if tracing:
            trace.record(TraceEvent(RANDOM_SAMPLING, prisoner, attempt, box, value))
        if value == prisoner:
            return True

    return False


# ------------------------------------------------------------
# Whole trial (all prisoners, one permutation)
# ------------------------------------------------------------
#
# A trial is lost as soon as one prisoner fails, so the remaining
# prisoners are not evaluated. The outcome is the same as counting
# successes and comparing with N.

def attempt_cycle_following(
    perm: Sequence[int],
    open_budget: int,
    rng: random.Random,
    trace: TraceRecorder = NULL_TRACE,
) -> bool:
    for prisoner in range(len(perm)):
        if not cycle_following_prisoner(perm, prisoner, open_budget, trace):
            return False
    return True


def attempt_random_sampling(
    perm: Sequence[int],
    open_budget: int,
    rng: random.Random,
    trace: TraceRecorder = NULL_TRACE,
) -> bool:
    for prisoner in range(len(perm)):
        if not random_sampling_prisoner(perm, prisoner, open_budget, rng, trace):
            return False
    return True


# --- Registry / dispatch -----------------------------------------------------

def get_strategy(name: str) -> StrategyFn:
    name = name.strip().lower()
    if name not in STRATEGIES:
        raise ValueError(f"unknown strategy '{name}'. Available: {sorted(STRATEGIES.keys())}")
    return STRATEGIES[name]


STRATEGIES: Dict[str, StrategyFn] = {
    CYCLE_FOLLOWING: attempt_cycle_following,
    RANDOM_SAMPLING: attempt_random_sampling,
}
