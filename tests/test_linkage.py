"""Tests for the linkage update rules."""

import numpy as np
import pytest

from ahclust.core import BinaryTreeNode
from ahclust.distance import CityBlockDistance, EuclideanDistance, PearsonDistance
from ahclust.exceptions import ConfigurationError
from ahclust.linkage import (
    LINKAGES,
    AverageLinkage,
    CompleteLinkage,
    LinkageType,
    SingleLinkage,
    WardLinkage,
    WeightedAverageLinkage,
    get_linkage,
)


def _leaves(n):
    return [BinaryTreeNode.leaf(i, f"E{i + 1}") for i in range(n)]


class TestLinkageFormulas:
    """Test each rule on a hand-built 4-element triangular matrix."""

    def setup_method(self):
        """Only entries [i, j] with i < j are populated."""
        self.d = np.zeros((4, 4))
        self.d[0, 1] = 2.0
        self.d[0, 2] = 6.0
        self.d[0, 3] = 10.0
        self.d[1, 2] = 5.0
        self.d[1, 3] = 9.0
        self.d[2, 3] = 4.0
        self.nodes = _leaves(4)

    def test_single_is_minimum(self):
        rule = SingleLinkage()

        assert rule.distance(0, 1, 2, self.d, self.nodes) == pytest.approx(5.0)
        assert rule.distance(0, 1, 3, self.d, self.nodes) == pytest.approx(9.0)

    def test_complete_is_maximum(self):
        rule = CompleteLinkage()

        assert rule.distance(0, 1, 2, self.d, self.nodes) == pytest.approx(6.0)
        assert rule.distance(0, 1, 3, self.d, self.nodes) == pytest.approx(10.0)

    def test_average_is_plain_mean(self):
        rule = AverageLinkage()
        assert rule.distance(0, 1, 2, self.d, self.nodes) == pytest.approx(5.5)

    def test_weighted_average_uses_leaf_counts(self):
        rule = WeightedAverageLinkage()
        assert rule.distance(0, 1, 2, self.d, self.nodes) == pytest.approx(5.5)

        nodes = list(self.nodes)
        nodes[0] = BinaryTreeNode.merge(4, *_leaves(2), 1.0)
        assert rule.distance(0, 1, 2, self.d, nodes) == pytest.approx(17.0 / 3.0)

    def test_ward(self):
        rule = WardLinkage()
        assert rule.distance(0, 1, 2, self.d, self.nodes) == pytest.approx(20.0 / 3.0)

        nodes = list(self.nodes)
        nodes[0] = BinaryTreeNode.merge(4, *_leaves(2), 1.0)
        assert rule.distance(0, 1, 2, self.d, nodes) == pytest.approx(6.5)

    def test_third_cluster_below_merging_pair(self):
        """r < p reads the matrix with the smaller index first."""
        assert SingleLinkage().distance(2, 3, 0, self.d, self.nodes) == pytest.approx(6.0)
        assert CompleteLinkage().distance(2, 3, 1, self.d, self.nodes) == pytest.approx(9.0)

    def test_argument_order_of_pair_is_irrelevant(self):
        for rule in (SingleLinkage(), CompleteLinkage(), AverageLinkage()):
            assert rule.distance(1, 3, 2, self.d, self.nodes) == pytest.approx(
                rule.distance(3, 1, 2, self.d, self.nodes)
            )

    def test_pair_distance_helper(self):
        assert SingleLinkage.pair_distance(self.d, 3, 1) == 9.0
        assert SingleLinkage.pair_distance(self.d, 1, 3) == 9.0


class TestLinkageCompatibility:
    """Test metric pairing rules."""

    def test_ward_requires_euclidean(self):
        rule = WardLinkage()

        assert rule.is_compatible_with(EuclideanDistance())
        assert not rule.is_compatible_with(CityBlockDistance())
        assert not rule.is_compatible_with(PearsonDistance())

    def test_other_rules_accept_any_metric(self):
        for rule in (SingleLinkage(), CompleteLinkage(), AverageLinkage(), WeightedAverageLinkage()):
            assert rule.is_compatible_with(PearsonDistance())


class TestLinkageRegistry:
    """Test lookup by name."""

    def test_all_types_registered(self):
        assert set(LINKAGES) == {t.value for t in LinkageType}

    def test_get_by_name(self):
        assert isinstance(get_linkage("ward"), WardLinkage)
        assert isinstance(get_linkage("weighted_average"), WeightedAverageLinkage)
        assert isinstance(get_linkage(LinkageType.COMPLETE), CompleteLinkage)

    def test_unknown_name(self):
        with pytest.raises(ConfigurationError, match="Unknown linkage method"):
            get_linkage("centroid")
