"""Complete (furthest-neighbour) linkage."""

from typing import Sequence

import numpy as np

from ..core.tree import BinaryTreeNode
from .base import Linkage


class CompleteLinkage(Linkage):
    """Distance to the merged cluster is the larger of the two distances."""

    @property
    def name(self) -> str:
        return "Complete Linkage"

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
        return 0.5 * (d_rp + d_rq) + 0.5 * abs(d_rp - d_rq)
