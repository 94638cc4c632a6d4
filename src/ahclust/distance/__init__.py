"""Distance metrics between feature vectors."""

from enum import Enum
from typing import Union

from ..exceptions import ConfigurationError
from .base import DistanceMetric
from .chebyshev import ChebyshevDistance
from .city_block import CityBlockDistance
from .euclidean import EuclideanDistance
from .pearson import PearsonDistance

__all__ = [
    "DistanceMetric",
    "DistanceType",
    "EuclideanDistance",
    "CityBlockDistance",
    "ChebyshevDistance",
    "PearsonDistance",
    "DISTANCES",
    "get_distance",
]


class DistanceType(str, Enum):
    """Names of the available distance metrics."""

    EUCLIDEAN = "euclidean"  # Squared Euclidean
    CITY_BLOCK = "city_block"
    CHEBYSHEV = "chebyshev"
    PEARSON = "pearson"


# Metric registry for lookup by name
DISTANCES = {
    DistanceType.EUCLIDEAN.value: EuclideanDistance,
    DistanceType.CITY_BLOCK.value: CityBlockDistance,
    DistanceType.CHEBYSHEV.value: ChebyshevDistance,
    DistanceType.PEARSON.value: PearsonDistance,
}


def get_distance(name: Union[str, DistanceType]) -> DistanceMetric:
    """
    Get a distance metric by name.

    Args:
        name: Metric name ('euclidean', 'city_block', 'chebyshev', 'pearson')

    Returns:
        New metric instance

    Raises:
        ConfigurationError: If the name is not recognized
    """
    key = name.value if isinstance(name, DistanceType) else str(name).lower()
    if key not in DISTANCES:
        raise ConfigurationError(
            f"Unknown distance metric: {name}. "
            f"Available metrics: {list(DISTANCES.keys())}"
        )
    return DISTANCES[key]()
