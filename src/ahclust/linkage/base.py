"""Base linkage rule interface."""

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from ..core.tree import BinaryTreeNode
from ..distance.base import DistanceMetric


class Linkage(ABC):
    """
    Lance-Williams style update of cluster distances after a merge.

    Implementations compute the distance from a surviving cluster ``r`` to
    the cluster formed by merging ``p`` and ``q`` using only the pre-merge
    distance matrix and the cluster sizes.

    The distance matrix is triangular: only ``distances[i, j]`` with
    ``i < j`` is populated. Always read through :meth:`pair_distance`.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Linkage name."""
        pass

    @abstractmethod
    def distance(
        self,
        p: int,
        q: int,
        r: int,
        distances: np.ndarray,
        nodes: Sequence[BinaryTreeNode],
    ) -> float:
        """
        Distance between cluster ``r`` and the merge of ``p`` and ``q``.

        Args:
            p: Index of the first merging cluster
            q: Index of the second merging cluster
            r: Index of a third, surviving cluster
            distances: Pre-merge triangular distance matrix
            nodes: Current cluster nodes, indexed like ``distances``

        Returns:
            Updated distance
        """
        pass

    def is_compatible_with(self, metric: DistanceMetric) -> bool:
        """Whether this rule gives meaningful results with the metric."""
        return True

    @staticmethod
    def pair_distance(distances: np.ndarray, a: int, b: int) -> float:
        """Read the triangular matrix entry for clusters ``a`` and ``b``."""
        if a < b:
            return float(distances[a, b])
        return float(distances[b, a])

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
