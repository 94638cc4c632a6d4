"""Ward's minimum variance method."""

from typing import Sequence

import numpy as np

from ..core.tree import BinaryTreeNode
from ..distance.base import DistanceMetric
from ..distance.euclidean import EuclideanDistance
from .base import Linkage


class WardLinkage(Linkage):
    """
    Ward's method.

    Merges the pair of clusters whose union least increases the total
    within-cluster variance. The update is only valid on squared Euclidean
    distances, so any other metric is rejected.
    """

    @property
    def name(self) -> str:
        return "Ward's Method"

    def is_compatible_with(self, metric: DistanceMetric) -> bool:
        return isinstance(metric, EuclideanDistance)

    def distance(
        self,
        p: int,
        q: int,
        r: int,
        distances: np.ndarray,
        nodes: Sequence[BinaryTreeNode],
    ) -> float:
        d_rp = self.pair_distance(distances, r, p)
        d_rq = self.pair_distance(distances, r, q)
        d_pq = self.pair_distance(distances, p, q)

        n_p = nodes[p].leaf_count
        n_q = nodes[q].leaf_count
        n_r = nodes[r].leaf_count

        return ((n_p + n_r) * d_rp + (n_q + n_r) * d_rq - n_r * d_pq) / (
            n_p + n_q + n_r
        )
