"""Tests for capacity planning."""

import math
from fractions import Fraction

import pytest

from prioritized_grouping.capacity import excess_factor, plan_capacity
from prioritized_grouping.errors import ConfigurationError


class TestEqualSplit:
    def test_even_split_with_default_excess(self):
        assert plan_capacity(100, 10) == [12] * 10

    def test_uneven_split_rounds_up_before_scaling(self):
        # ceil(10 / 3) = 4, 4 * 1.2 = 4.8 -> 5
        assert plan_capacity(10, 3) == [5, 5, 5]

    def test_no_excess(self):
        assert plan_capacity(10, 3, excess_space=0) == [4, 4, 4]

    def test_zero_subjects(self):
        assert plan_capacity(0, 2) == [0, 0]


class TestCapClasses:
    def test_scalar_applies_to_every_group(self):
        assert plan_capacity(10, 2, cap_classes=5, excess_space=10) == [6, 6]

    def test_length_one_sequence_is_scalar(self):
        assert plan_capacity(10, 3, cap_classes=[4], excess_space=0) == [4, 4, 4]

    def test_vector_per_group(self):
        assert plan_capacity(10, 3, cap_classes=[3, 4, 5], excess_space=0) == [3, 4, 5]

    def test_vector_is_scaled_and_rounded_up(self):
        assert plan_capacity(10, 3, cap_classes=[3, 4, 5], excess_space=50) == [5, 6, 8]

    def test_wrong_length_raises(self):
        with pytest.raises(ConfigurationError, match="length 1 or same as number of groups"):
            plan_capacity(10, 3, cap_classes=[3, 4])

    def test_non_whole_capacity_raises(self):
        with pytest.raises(ConfigurationError, match="whole number"):
            plan_capacity(10, 2, cap_classes=2.5)

    def test_negative_capacity_raises(self):
        with pytest.raises(ConfigurationError, match="non-negative"):
            plan_capacity(10, 2, cap_classes=[-1, 3])

    def test_zero_capacity_closes_a_group(self):
        assert plan_capacity(4, 2, cap_classes=[0, 4], excess_space=0) == [0, 4]
        assert plan_capacity(4, 2, cap_classes=[0, 4]) == [0, 5]


class TestScaling:
    @pytest.mark.parametrize(
        "base,excess_space",
        [(1, 20), (3, 20), (7, 15), (10, 10), (9, 33.3), (12, 0), (5, 100)],
    )
    def test_never_rounded_down(self, base, excess_space):
        (capacity,) = plan_capacity(base, 1, excess_space=excess_space)
        assert capacity >= base * (1 + excess_space / 100) - 1e-9
        assert capacity == math.ceil(round(base * (1 + excess_space / 100), 9))

    def test_exact_products_are_not_bumped(self):
        # 10 * 1.1 is 11.000000000000002 in floating point
        assert plan_capacity(20, 2, cap_classes=10, excess_space=10) == [11, 11]

    def test_excess_factor(self):
        assert excess_factor(20) == Fraction(6, 5)
        assert excess_factor(0) == 1

    def test_negative_excess_raises(self):
        with pytest.raises(ConfigurationError, match="excess_space"):
            plan_capacity(10, 2, excess_space=-5)

    def test_no_groups_raises(self):
        with pytest.raises(ConfigurationError, match="At least one group"):
            plan_capacity(10, 0)
