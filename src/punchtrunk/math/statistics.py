"""Descriptive statistics for per-run normalisation."""

import math
from collections.abc import Iterable

import numpy as np

# Spread below this fraction of the magnitude is rounding noise, not signal
RELATIVE_TOLERANCE = 1e-9


class Statistics:
    """Statistical helpers used by the ranker."""

    @staticmethod
    def mean_std(values: Iterable[float]) -> tuple[float, float]:
        """
        Compute mean and population standard deviation.

        The population form (divide by N) is used because the values are the
        whole run's file set, not a sample of it. Values that are equal up
        to floating-point rounding have a std of exactly 0.0.

        Args:
            values: Observations

        Returns:
            (mean, std); (0.0, 0.0) for an empty input
        """
        arr = np.fromiter(values, dtype=float)
        if arr.size == 0:
            return 0.0, 0.0
        mean = float(arr.mean())
        if np.allclose(arr, arr[0], rtol=RELATIVE_TOLERANCE, atol=0.0):
            return float(arr[0]), 0.0
        std = float(math.sqrt(float(np.mean((arr - mean) ** 2))))
        return mean, std

    @staticmethod
    def z_score(x: float, mean: float, std: float) -> float:
        """Compute single z-score: z = (x - mu) / sigma, 0 when sigma is 0."""
        if std == 0:
            return 0.0
        return (x - mean) / std
