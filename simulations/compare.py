# simulations/compare.py

from __future__ import annotations

import argparse
import sys
from typing import List

import matplotlib.pyplot as plt

from .common import ConfigError, ExperimentResult, ExperimentSpec, format_rate_line
from .log_utils import get_logger
from .methods import METHODS
from .run import run_strategies


DEFAULT_PRISONERS = 100
DEFAULT_TRIALS = 10_000
DEFAULT_SEED = 42


def _selected_methods(choice: str) -> List[str]:
    if choice == "both":
        return sorted(METHODS.keys())
    return [choice]


def _plot(results: List[ExperimentResult]) -> None:
    names = [r.method for r in results]
    xs = list(range(len(results)))
    width = 0.38

    plt.figure(figsize=(8, 4))
    plt.bar(
        [x - width / 2 for x in xs],
        [r.rate for r in results],
        width,
        yerr=[1.96 * r.std_error for r in results],
        label="simulated",
    )
    plt.bar(
        [x + width / 2 for x in xs],
        [r.expected_rate or 0.0 for r in results],
        width,
        label="expected",
    )
    plt.xticks(xs, names)
    plt.ylabel("Success rate (%)")
    plt.ylim(0, 100)
    plt.legend()

    spec = results[0].spec
    plt.title(
        f"prisoners={spec.prisoners}, open_budget={spec.open_budget}, trials={spec.trials}"
    )
    plt.tight_layout()
    plt.show()


def main(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(
        description="Estimate 100 prisoners problem success rates via Monte Carlo."
    )
    parser.add_argument("--prisoners", type=int, default=DEFAULT_PRISONERS, help="number of prisoners (and boxes)")
    parser.add_argument("--open-budget", type=int, default=None, help="boxes each prisoner may open (default: prisoners / 2)")
    parser.add_argument("--trials", type=int, default=DEFAULT_TRIALS, help="trials per strategy")
    parser.add_argument(
        "--strategy",
        choices=sorted(METHODS.keys()) + ["both"],
        default="both",
        help="which strategy to simulate",
    )
    parser.add_argument("--workers", type=int, default=1, help="concurrent shards per strategy")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="base RNG seed")
    parser.add_argument("--debug", action="store_true", help="log every box opened (small runs only)")
    parser.add_argument("--plot", action="store_true", help="show simulated vs expected rates")

    args = parser.parse_args(argv)

    try:
        spec = ExperimentSpec(
            prisoners=args.prisoners,
            trials=args.trials,
            open_budget=args.open_budget,
            workers=args.workers,
            seed=args.seed,
            debug=args.debug,
        )
    except ConfigError as e:
        parser.error(str(e))

    get_logger(debug=spec.debug)

    results = run_strategies(_selected_methods(args.strategy), spec)

    for r in results:
        print(format_rate_line(r))

    if args.plot:
        _plot(results)

    return 0


def cli() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(cli())
