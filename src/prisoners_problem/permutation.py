import random
from typing import List, Sequence, Tuple


# Permutation[b] = prisoner number hidden in box b.
Permutation = Tuple[int, ...]


def place_boxes(n: int, rng: random.Random) -> Permutation:
    """
    Hide the numbers 0..n-1 in n boxes, uniformly at random.

    Every one of the n! arrangements is equally likely (Fisher-Yates via
    random.Random.shuffle). Advances rng.
    """
    if n <= 0:
        raise ValueError("n must be > 0")

    boxes = list(range(n))
    rng.shuffle(boxes)
    return tuple(boxes)


def is_permutation(seq: Sequence[int]) -> bool:
    """True iff seq holds every value of range(len(seq)) exactly once."""
    n = len(seq)
    seen = [False] * n
    for v in seq:
        if v < 0 or v >= n or seen[v]:
            return False
        seen[v] = True
    return True


def cycle_lengths(perm: Sequence[int]) -> List[int]:
    """
    Lengths of the cycles of perm, in order of their smallest index.
    The lengths always sum to len(perm).
    """
    n = len(perm)
    visited = [False] * n
    lengths: List[int] = []

    for start in range(n):
        if visited[start]:
            continue
        length = 0
        i = start
        while not visited[i]:
            visited[i] = True
            i = perm[i]
            length += 1
        lengths.append(length)

    return lengths


def longest_cycle(perm: Sequence[int]) -> int:
    lengths = cycle_lengths(perm)
    return max(lengths) if lengths else 0
