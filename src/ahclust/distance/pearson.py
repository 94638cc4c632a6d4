"""Correlation distance based on the Pearson coefficient."""

import numpy as np

from ..exceptions import DegenerateDataError
from .base import DistanceMetric


class PearsonDistance(DistanceMetric):
    """
    One minus the Pearson correlation of two profiles.

    Identical profiles are at distance 0, uncorrelated ones at 1 and perfectly
    anti-correlated ones at 2. Moments are population moments; the
    normalisation cancels in the ratio.

    A constant vector has no variance, so its correlation is undefined and
    :class:`DegenerateDataError` is raised rather than returning NaN.
    """

    min_features = 2

    @property
    def name(self) -> str:
        return "Pearson Correlation"

    def _distance(self, v1: np.ndarray, v2: np.ndarray) -> float:
        if v1.size < self.min_features:
            raise DegenerateDataError(
                f"Pearson correlation needs at least {self.min_features} features"
            )

        d1 = v1 - v1.mean()
        d2 = v2 - v2.mean()

        cov = np.dot(d1, d2)
        s1 = np.dot(d1, d1)
        s2 = np.dot(d2, d2)

        denominator = np.sqrt(s1 * s2)
        if denominator == 0.0:
            raise DegenerateDataError("Pearson correlation of a constant vector")

        return 1.0 - cov / denominator
