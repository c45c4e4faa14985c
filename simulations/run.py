# simulations/run.py

from __future__ import annotations

import logging
import os
from concurrent.futures import Executor, Future, ProcessPoolExecutor, as_completed
from typing import Dict, List, Optional, Sequence, Tuple

from . import methods
from .common import (
    BatchResult,
    ExperimentResult,
    ExperimentSpec,
    Timer,
    combine_batches,
    shard_sizes,
)

from prisoners_problem.analytic import success_probability


logger = logging.getLogger(__name__)


class WorkerFailedError(RuntimeError):
    """A trial worker died; the whole run is void."""

    def __init__(self, method: str, shard: int, cause: BaseException):
        super().__init__(f"worker for '{method}' shard {shard} failed: {cause!r}")
        self.method = method
        self.shard = shard


# (method, shard index, trials in shard)
Task = Tuple[str, int, int]


def _plan(method_names: Sequence[str], spec: ExperimentSpec) -> List[Task]:
    tasks: List[Task] = []
    for name in method_names:
        for shard, size in enumerate(shard_sizes(spec.trials, spec.workers)):
            tasks.append((name, shard, size))
    return tasks


def _run_inline(tasks: List[Task], spec: ExperimentSpec) -> List[BatchResult]:
    batches: List[BatchResult] = []
    for name, shard, size in tasks:
        if shard == 0 and size == spec.trials:
            batches.append(methods.get_method(name)(spec))
        else:
            batches.append(methods.run_batch(name, spec, shard, size))
    return batches


def _run_pooled(tasks: List[Task], spec: ExperimentSpec, executor: Executor) -> List[BatchResult]:
    """
    Submit every shard, then block until all of them are done.
    The first failure cancels whatever has not started yet and is raised.
    """
    futures: Dict[Future, Task] = {
        executor.submit(methods.run_batch, name, spec, shard, size): (name, shard, size)
        for name, shard, size in tasks
    }

    batches: List[BatchResult] = []
    for future in as_completed(futures):
        name, shard, _ = futures[future]
        try:
            batches.append(future.result())
        except Exception as e:
            for other in futures:
                other.cancel()
            logger.error("[%s] shard %d failed: %r", name, shard, e)
            raise WorkerFailedError(name, shard, e) from e
    return batches


def run_strategies(
    method_names: Sequence[str],
    spec: ExperimentSpec,
    executor: Optional[Executor] = None,
) -> List[ExperimentResult]:
    """
    Run spec.trials trials for every named strategy and return one
    ExperimentResult per strategy, in the order asked for.

    Each strategy's trials are split into spec.workers shards. With more
    than one shard in total they run concurrently on `executor`
    (a process pool sized to the shards by default). Debug runs stay
    in-process so the trace goes through this process's logging setup.

    A failing shard raises WorkerFailedError as soon as it is seen. The
    default pool is shut down without waiting for the other shards; a
    caller-supplied executor is left to its owner.
    """
    names = []
    for m in method_names:
        name = m.strip().lower()
        methods.get_method(name)  # fail before anything is spawned
        if name not in names:
            names.append(name)
    if not names:
        raise ValueError("at least one method is required")

    tasks = _plan(names, spec)
    logger.info(
        "RUN START methods=%s prisoners=%d open_budget=%d trials=%d workers=%d seed=%s",
        ",".join(names), spec.prisoners, spec.open_budget, spec.trials, spec.workers, spec.seed,
    )

    with Timer() as t:
        if executor is not None:
            batches = _run_pooled(tasks, spec, executor)
        elif len(tasks) == 1 or spec.debug:
            batches = _run_inline(tasks, spec)
        else:
            max_workers = min(len(tasks), os.cpu_count() or 1)
            pool = ProcessPoolExecutor(max_workers=max_workers)
            try:
                batches = _run_pooled(tasks, spec, pool)
            except BaseException:
                # Shards still running are abandoned, not awaited.
                pool.shutdown(wait=False, cancel_futures=True)
                raise
            pool.shutdown()

    results: List[ExperimentResult] = []
    for name in names:
        own = [b for b in batches if b.method == name]
        successes, trials = combine_batches(own)
        result = ExperimentResult(
            method=name,
            spec=spec,
            successes=successes,
            trials=trials,
            runtime_s=t.elapsed_s,
            expected_rate=success_probability(name, spec.prisoners, spec.open_budget) * 100.0,
            meta={"shards": len(own)},
        )
        logger.info(
            "RUN DONE %s rate=%.4f%% (%d/%d) in %.3fs",
            name, result.rate, successes, trials, t.elapsed_s or 0.0,
        )
        results.append(result)
    return results


def run_experiment(
    method: str,
    prisoners: int = 100,
    trials: int = 10_000,
    open_budget: Optional[int] = None,
    workers: int = 1,
    seed: Optional[int] = 42,
    debug: bool = False,
) -> ExperimentResult:
    """
    Run a single strategy and return an ExperimentResult.

    Parameters
    ----------
    method:
        Strategy name ('cycle_following' or 'random_sampling').
    prisoners:
        Number of prisoners, and of boxes.
    trials:
        Number of independent trials.
    open_budget:
        Boxes each prisoner may open (defaults to prisoners // 2).
    workers:
        Number of shards the trials are split into.
    seed:
        Base RNG seed; None for an unseeded run.
    debug:
        Log every opened box at DEBUG level.

    Returns
    -------
    ExperimentResult
    """
    spec = ExperimentSpec(
        prisoners=prisoners,
        trials=trials,
        open_budget=open_budget,
        workers=workers,
        seed=seed,
        debug=debug,
    )
    return run_strategies([method], spec)[0]
