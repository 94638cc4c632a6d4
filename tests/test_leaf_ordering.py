"""Tests for optimal leaf ordering."""

import numpy as np
import pytest

from ahclust import AhcAlgorithm, cluster
from ahclust.core import DataMatrix
from ahclust.exceptions import NotReadyError


def _one_feature(values):
    return DataMatrix.from_array([[v] for v in values])


class TestSortLeaves:
    """Test flipping subtrees to shorten adjacent leaf distances."""

    def setup_method(self):
        self.ahc = AhcAlgorithm(linkage="single")
        self.ahc.set_data(_one_feature([1, 2, 10, 11]))
        self.ahc.run()

    def test_cost_before_sorting(self):
        assert self.ahc.ordering_cost() == 102.0

    def test_both_children_flipped(self):
        cost = self.ahc.sort_leaves()

        assert cost == 66.0
        assert self.ahc.ordering_cost() == 66.0
        assert self.ahc.permutation.tolist() == [3, 2, 1, 0]
        assert [leaf.name for leaf in self.ahc.tree.leaves()] == [
            "E4",
            "E3",
            "E2",
            "E1",
        ]

    def test_merges_unchanged(self):
        before = [m.to_dict() for m in self.ahc.merges]
        self.ahc.sort_leaves()

        assert [m.to_dict() for m in self.ahc.merges] == before
        assert self.ahc.tree.leaf_count == 4

    def test_ordered_data_follows_sorted_leaves(self):
        self.ahc.sort_leaves()
        ordered = self.ahc.ordered_data()

        np.testing.assert_array_equal(ordered.data[:, 0], [11, 10, 2, 1])

    def test_sort_before_run(self):
        ahc = AhcAlgorithm()
        ahc.set_data(_one_feature([1, 2]))

        with pytest.raises(NotReadyError):
            ahc.sort_leaves()


class TestSortLeavesEdgeCases:
    """Test orderings that cannot or should not change."""

    def test_first_best_candidate_kept(self):
        """Flipping the left pair is worse, so the order stays as built."""
        ahc = cluster(_one_feature([0, 1, 3]))

        assert ahc.permutation.tolist() == [0, 1, 2]
        assert ahc.sort_leaves() == 5.0
        assert ahc.permutation.tolist() == [0, 1, 2]

    def test_single_element(self):
        ahc = cluster(_one_feature([4.0]))

        assert ahc.sort_leaves() == 0.0
        assert ahc.permutation.tolist() == [0]

    def test_two_elements(self):
        ahc = cluster(_one_feature([4.0, 6.0]))

        assert ahc.sort_leaves() == 4.0
        assert sorted(ahc.permutation.tolist()) == [0, 1]

    @pytest.mark.parametrize("linkage", ["single", "complete", "average", "ward"])
    def test_returned_cost_matches_final_order(self, linkage):
        ahc = cluster(DataMatrix.random(25, 3, seed=7), linkage=linkage)
        cost = ahc.sort_leaves()

        assert cost == pytest.approx(ahc.ordering_cost())
        assert sorted(ahc.permutation.tolist()) == list(range(25))

    def test_permutation_matches_leaves(self):
        ahc = cluster(DataMatrix.random(10, 2, seed=1), sort_leaves=True)
        leaves = ahc.tree.leaves()

        for position, leaf in enumerate(leaves):
            assert ahc.permutation[leaf.id] == position
