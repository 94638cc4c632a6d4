"""Squared Euclidean distance."""

import numpy as np
from scipy.spatial.distance import sqeuclidean

from .base import DistanceMetric


class EuclideanDistance(DistanceMetric):
    """
    Sum of squared differences.

    The square root is deliberately not taken: Ward's linkage update works on
    squared distances.
    """

    @property
    def name(self) -> str:
        return "Euclidean Distance"

    def _distance(self, v1: np.ndarray, v2: np.ndarray) -> float:
        return sqeuclidean(v1, v2)
