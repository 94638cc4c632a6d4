"""Tests for BinaryTreeNode."""

import pytest

from ahclust.core import BinaryTreeNode


def _names(nodes):
    return [node.name for node in nodes]


class TestBinaryTreeNode:
    """Test tree construction, navigation and flipping."""

    def setup_method(self):
        """Build ((a, b), (c, (d, e)))."""
        self.a = BinaryTreeNode.leaf(0, "a")
        self.b = BinaryTreeNode.leaf(1, "b")
        self.c = BinaryTreeNode.leaf(2, "c")
        self.d = BinaryTreeNode.leaf(3, "d")
        self.e = BinaryTreeNode.leaf(4, "e")
        self.ab = BinaryTreeNode.merge(5, self.a, self.b, 1.0)
        self.de = BinaryTreeNode.merge(6, self.d, self.e, 1.5)
        self.cde = BinaryTreeNode.merge(7, self.c, self.de, 3.0)
        self.root = BinaryTreeNode.merge(8, self.ab, self.cde, 7.0)

    def test_leaf_attributes(self):
        assert self.a.is_leaf
        assert self.a.level == 0
        assert self.a.leaf_count == 1
        assert self.a.child_distance == 0.0
        assert self.a.left_child is None and self.a.right_child is None

    def test_internal_attributes(self):
        assert not self.root.is_leaf
        assert self.root.id == 8
        assert self.root.level == 3
        assert self.cde.level == 2
        assert self.root.leaf_count == 5
        assert self.root.name == "a,b,c,d,e"
        assert self.root.child_distance == 7.0

    def test_parent_links(self):
        assert self.root.parent is None
        assert self.ab.parent is self.root
        assert self.d.parent is self.de

    def test_parent_is_set_once(self):
        with pytest.raises(ValueError):
            BinaryTreeNode.merge(9, self.a, self.c, 2.0)

    def test_needs_zero_or_two_children(self):
        leaf = BinaryTreeNode.leaf(0, "x")
        with pytest.raises(ValueError):
            BinaryTreeNode(1, "y", left_child=leaf)

    def test_outer_leaves(self):
        assert self.root.left_leaf is self.a
        assert self.root.right_leaf is self.e
        assert self.a.left_leaf is self.a

    def test_leaves_in_order(self):
        assert _names(self.root.leaves()) == ["a", "b", "c", "d", "e"]

    def test_iter_nodes_pre_order(self):
        ids = [node.id for node in self.root.iter_nodes()]
        assert ids == [8, 5, 0, 1, 7, 2, 6, 3, 4]

    def test_flip_mirrors_whole_subtree(self):
        self.root.flip()

        assert _names(self.root.leaves()) == ["e", "d", "c", "b", "a"]
        assert self.root.left_child is self.cde
        assert self.cde.left_child is self.de

    def test_flip_twice_restores_structure(self):
        before = [(n.id, n.name, getattr(n.left_child, "id", None)) for n in self.root.iter_nodes()]

        self.root.flip()
        self.root.flip()

        after = [(n.id, n.name, getattr(n.left_child, "id", None)) for n in self.root.iter_nodes()]
        assert after == before

    def test_flip_subtree_only(self):
        self.cde.flip()

        assert _names(self.root.leaves()) == ["a", "b", "e", "d", "c"]
        assert self.root.left_child is self.ab

    def test_flip_leaf_is_noop(self):
        self.a.flip()
        assert self.a.is_leaf
        assert _names(self.root.leaves()) == ["a", "b", "c", "d", "e"]

    def test_to_dict(self):
        view = self.root.to_dict()

        assert view["id"] == 8
        assert view["leaf_count"] == 5
        assert view["distance"] == 7.0
        assert [child["id"] for child in view["children"]] == [5, 7]
        assert "children" not in view["children"][0]["children"][0]

    def test_deep_chain_does_not_recurse(self):
        node = BinaryTreeNode.leaf(0, "0")
        for i in range(1, 1500):
            node = BinaryTreeNode.merge(1499 + i, node, BinaryTreeNode.leaf(i, str(i)), float(i))

        node.flip()
        leaves = node.leaves()

        assert len(leaves) == 1500
        assert leaves[0].id == 1499
        assert leaves[-1].id == 0
        assert node.level == 1499
