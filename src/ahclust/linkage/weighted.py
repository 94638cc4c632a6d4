"""Size-weighted mean of the two pre-merge distances."""

from typing import Sequence

import numpy as np

from ..core.tree import BinaryTreeNode
from .base import Linkage


class WeightedAverageLinkage(Linkage):
    """
    Weighted average linkage.

    Each merging cluster contributes in proportion to its leaf count, which
    equals the mean distance over all element pairs (scipy's 'average',
    UPGMA).
    """

    @property
    def name(self) -> str:
        return "Weighted Average"

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

        n_p = nodes[p].leaf_count
        n_q = nodes[q].leaf_count

        return (n_p * d_rp + n_q * d_rq) / (n_p + n_q)
