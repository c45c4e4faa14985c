"""
Closed-form success probabilities for both strategies.

These are what the simulations should converge to, and are reported next
to the simulated rates.
"""

from typing import List

from .strategies import CYCLE_FOLLOWING, RANDOM_SAMPLING


def _check(n: int, m: int) -> None:
    if n <= 0:
        raise ValueError("n must be > 0")
    if m < 0 or m > n:
        raise ValueError("m must be in [0, n]")


def cycle_following_success_probability(n: int, m: int) -> float:
    """
    P(a uniform permutation of n has no cycle longer than m).

    With p(k) the answer for k elements, the cycle through element 0 has
    length j with probability 1/k for every j, which gives

        p(0) = 1
        p(k) = (1/k) * sum_{j=1..min(m, k)} p(k - j)

    For m >= n/2 this equals 1 - sum_{k=m+1..n} 1/k (~0.3118 for 100/50).
    """
    _check(n, m)

    p: List[float] = [1.0] + [0.0] * n
    window = 0.0  # sum of the last min(m, k) values of p
    for k in range(1, n + 1):
        window += p[k - 1]
        if k - 1 - m >= 0:
            window -= p[k - 1 - m]
        p[k] = window / k
    return p[n]


def random_sampling_success_probability(n: int, m: int) -> float:
    """
    Each prisoner independently finds their number with probability m/n,
    whatever the permutation.
    """
    _check(n, m)
    return (m / n) ** n


def success_probability(method: str, n: int, m: int) -> float:
    name = method.strip().lower()
    if name == CYCLE_FOLLOWING:
        return cycle_following_success_probability(n, m)
    if name == RANDOM_SAMPLING:
        return random_sampling_success_probability(n, m)
    raise ValueError(
        f"unknown strategy '{name}'. Available: {sorted([CYCLE_FOLLOWING, RANDOM_SAMPLING])}"
    )
