"""City-block (Manhattan) distance."""

import numpy as np
from scipy.spatial.distance import cityblock

from .base import DistanceMetric


class CityBlockDistance(DistanceMetric):
    """Sum of absolute differences."""

    @property
    def name(self) -> str:
        return "City Block Distance"

    def _distance(self, v1: np.ndarray, v2: np.ndarray) -> float:
        return cityblock(v1, v2)
