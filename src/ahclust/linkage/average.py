"""Unweighted mean of the two pre-merge distances."""

from typing import Sequence

import numpy as np

from ..core.tree import BinaryTreeNode
from .base import Linkage


class AverageLinkage(Linkage):
    """
    Average linkage.

    Both merging clusters contribute equally regardless of their size
    (scipy calls this rule 'weighted', WPGMA).
    """

    @property
    def name(self) -> str:
        return "Average"

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
        return 0.5 * (d_rp + d_rq)
