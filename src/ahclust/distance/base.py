"""Base distance metric interface."""

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from ..exceptions import InvalidShapeError


class DistanceMetric(ABC):
    """
    Abstract dissimilarity between two feature vectors.

    Implementations are stateless; one instance can be shared between
    clustering runs.
    """

    #: Smallest vector length for which the metric is defined
    min_features: int = 1

    @property
    @abstractmethod
    def name(self) -> str:
        """Metric name."""
        pass

    @abstractmethod
    def _distance(self, v1: np.ndarray, v2: np.ndarray) -> float:
        pass

    def distance(self, v1: Any, v2: Any) -> float:
        """
        Compute the dissimilarity of two equal-length vectors.

        Args:
            v1: Feature values of the first element
            v2: Feature values of the second element

        Returns:
            Non-negative distance as a Python float

        Raises:
            InvalidShapeError: If the vectors differ in length
        """
        a = np.asarray(v1, dtype=np.float64).ravel()
        b = np.asarray(v2, dtype=np.float64).ravel()
        if a.shape != b.shape:
            raise InvalidShapeError(
                f"Vectors of length {a.size} and {b.size} cannot be compared"
            )
        return float(self._distance(a, b))

    def __call__(self, v1: Any, v2: Any) -> float:
        return self.distance(v1, v2)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
