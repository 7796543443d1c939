"""Tests for punchtrunk.math.statistics module."""

import pytest

from punchtrunk.math import Statistics


class TestMeanStd:
    """Tests for mean and population standard deviation."""

    def test_empty(self):
        assert Statistics.mean_std([]) == (0.0, 0.0)

    def test_single_value(self):
        """A single observation has no spread."""
        assert Statistics.mean_std([42.0]) == (42.0, 0.0)

    def test_population_std(self):
        """[2, 4, 4, 4, 5, 5, 7, 9] has mean 5 and population std 2."""
        mean, std = Statistics.mean_std([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])
        assert mean == pytest.approx(5.0)
        assert std == pytest.approx(2.0)

    def test_accepts_generators(self):
        mean, std = Statistics.mean_std(x for x in (1.0, 3.0))
        assert (mean, std) == (pytest.approx(2.0), pytest.approx(1.0))


class TestZScore:
    def test_zero_std(self):
        assert Statistics.z_score(10.0, 3.0, 0.0) == 0.0

    def test_known(self):
        assert Statistics.z_score(9.0, 5.0, 2.0) == pytest.approx(2.0)
        assert Statistics.z_score(1.0, 5.0, 2.0) == pytest.approx(-2.0)


class TestRoundingNoise:
    def test_identical_non_dyadic_values_have_zero_std(self):
        assert Statistics.mean_std([0.1, 0.1, 0.1]) == (0.1, 0.0)

    def test_identical_values_after_arithmetic(self):
        values = [1 / 3, 1 / 3, 1 / 3, 1 / 3, 1 / 3, 1 / 3, 1 / 3]
        assert Statistics.mean_std(values)[1] == 0.0

    def test_real_spread_is_kept(self):
        mean, std = Statistics.mean_std([0.1, 0.1, 0.1000001])
        assert std > 0
