"""
tests/test_permutation.py
=========================
Box placement and cycle helpers.
"""

import itertools
import random

import pytest

from prisoners_problem.permutation import (
    cycle_lengths,
    is_permutation,
    longest_cycle,
    place_boxes,
)


class TestPlaceBoxes:
    """Test the permutation generator."""

    @pytest.mark.parametrize("n", [1, 2, 3, 10, 100, 257])
    def test_is_bijection(self, n, rng):
        for _ in range(20):
            perm = place_boxes(n, rng)
            assert len(perm) == n
            assert sorted(perm) == list(range(n))

    def test_returns_immutable_tuple(self, rng):
        assert isinstance(place_boxes(10, rng), tuple)

    def test_same_seed_same_permutations(self):
        a = random.Random(7)
        b = random.Random(7)
        assert [place_boxes(50, a) for _ in range(5)] == [place_boxes(50, b) for _ in range(5)]

    def test_fresh_permutation_each_call(self, rng):
        perms = {place_boxes(100, rng) for _ in range(50)}
        assert len(perms) == 50

    def test_uniform_over_small_n(self, rng):
        counts = {p: 0 for p in itertools.permutations(range(3))}
        draws = 6000
        for _ in range(draws):
            counts[place_boxes(3, rng)] += 1
        for c in counts.values():
            assert abs(c - draws / 6) < 150

    def test_rejects_non_positive_size(self, rng):
        with pytest.raises(ValueError):
            place_boxes(0, rng)


class TestCycles:
    """Test cycle structure helpers."""

    def test_identity_has_fixed_points(self):
        assert cycle_lengths((0, 1, 2, 3)) == [1, 1, 1, 1]
        assert longest_cycle((0, 1, 2, 3)) == 1

    def test_single_long_cycle(self):
        assert cycle_lengths((1, 2, 3, 0)) == [4]

    def test_mixed_cycles(self):
        # 0 -> 2 -> 0, 1 -> 1, 3 -> 4 -> 5 -> 3
        perm = (2, 1, 0, 4, 5, 3)
        assert cycle_lengths(perm) == [2, 1, 3]
        assert longest_cycle(perm) == 3

    def test_lengths_sum_to_n(self, rng):
        for _ in range(100):
            perm = place_boxes(60, rng)
            assert sum(cycle_lengths(perm)) == 60

    def test_empty(self):
        assert cycle_lengths(()) == []
        assert longest_cycle(()) == 0

    def test_is_permutation(self):
        assert is_permutation((2, 0, 1))
        assert not is_permutation((0, 0, 1))
        assert not is_permutation((0, 1, 3))
        assert not is_permutation((-1, 0, 1))
