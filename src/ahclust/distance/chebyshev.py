"""Chebyshev (maximum) distance."""

import numpy as np
from scipy.spatial.distance import chebyshev

from .base import DistanceMetric


class ChebyshevDistance(DistanceMetric):
    """Largest absolute difference over all features."""

    @property
    def name(self) -> str:
        return "Chebyshev Distance"

    def _distance(self, v1: np.ndarray, v2: np.ndarray) -> float:
        if v1.size == 0:
            return 0.0
        return chebyshev(v1, v2)
