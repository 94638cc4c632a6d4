"""Binary merge tree produced by agglomerative clustering."""

from typing import Any, Dict, Iterator, List, Optional


class BinaryTreeNode:
    """
    Node of the merge tree.

    Leaves stand for original elements and are numbered ``0..n-1`` in input
    order. Internal nodes stand for merges and continue the numbering, so the
    root of a tree over ``n`` elements has id ``2n - 2``.

    The topology is fixed once built. The only mutation is :meth:`flip`,
    which mirrors a whole subtree.

    Attributes:
        id: Sequential node id
        level: 0 for leaves, otherwise one more than the deeper child
        leaf_count: Number of original elements below this node
        name: Element label, or the comma-joined names of the children
        child_distance: Distance at which the children were merged (0 for leaves)
    """

    def __init__(
        self,
        node_id: int,
        name: str,
        left_child: Optional["BinaryTreeNode"] = None,
        right_child: Optional["BinaryTreeNode"] = None,
        child_distance: float = 0.0,
    ):
        if (left_child is None) != (right_child is None):
            raise ValueError("A node needs either two children or none")

        self._id = node_id
        self._name = name
        self._left = left_child
        self._right = right_child
        self._parent: Optional[BinaryTreeNode] = None
        self._child_distance = float(child_distance)

        if left_child is None:
            self._level = 0
            self._leaf_count = 1
        else:
            left_child._attach(self)
            right_child._attach(self)
            self._level = max(left_child.level, right_child.level) + 1
            self._leaf_count = left_child.leaf_count + right_child.leaf_count

    @classmethod
    def leaf(cls, node_id: int, name: str) -> "BinaryTreeNode":
        """Create a leaf for an original element."""
        return cls(node_id, name)

    @classmethod
    def merge(
        cls,
        node_id: int,
        left_child: "BinaryTreeNode",
        right_child: "BinaryTreeNode",
        distance: float,
    ) -> "BinaryTreeNode":
        """Create the node joining two clusters at the given distance."""
        return cls(
            node_id,
            f"{left_child.name},{right_child.name}",
            left_child,
            right_child,
            distance,
        )

    def _attach(self, parent: "BinaryTreeNode") -> None:
        if self._parent is not None:
            raise ValueError(f"Node {self._id} already has parent {self._parent.id}")
        self._parent = parent

    @property
    def id(self) -> int:
        return self._id

    @property
    def level(self) -> int:
        return self._level

    @property
    def leaf_count(self) -> int:
        return self._leaf_count

    @property
    def name(self) -> str:
        return self._name

    @property
    def child_distance(self) -> float:
        return self._child_distance

    @property
    def left_child(self) -> Optional["BinaryTreeNode"]:
        return self._left

    @property
    def right_child(self) -> Optional["BinaryTreeNode"]:
        return self._right

    @property
    def parent(self) -> Optional["BinaryTreeNode"]:
        """Enclosing node, None for the root."""
        return self._parent

    @property
    def is_leaf(self) -> bool:
        return self._left is None and self._right is None

    @property
    def left_leaf(self) -> "BinaryTreeNode":
        """Leftmost leaf below this node."""
        node = self
        while not node.is_leaf:
            node = node._left
        return node

    @property
    def right_leaf(self) -> "BinaryTreeNode":
        """Rightmost leaf below this node."""
        node = self
        while not node.is_leaf:
            node = node._right
        return node

    def flip(self) -> None:
        """Swap left and right children at this node and every descendant."""
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                continue
            node._left, node._right = node._right, node._left
            stack.append(node._left)
            stack.append(node._right)

    def leaves(self) -> List["BinaryTreeNode"]:
        """Leaves in left-to-right order."""
        result = []
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                result.append(node)
            else:
                # Right pushed first so the left subtree is visited first
                stack.append(node._right)
                stack.append(node._left)
        return result

    def iter_nodes(self) -> Iterator["BinaryTreeNode"]:
        """Yield this node and all descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if not node.is_leaf:
                stack.append(node._right)
                stack.append(node._left)

    def to_dict(self) -> Dict[str, Any]:
        """Nested dictionary view of the subtree, e.g. for rendering."""
        # Built bottom-up from a post-order walk to stay iterative
        views: Dict[int, Dict[str, Any]] = {}
        for node in reversed(list(self.iter_nodes())):
            view: Dict[str, Any] = {
                "id": node.id,
                "name": node.name,
                "level": node.level,
                "leaf_count": node.leaf_count,
            }
            if not node.is_leaf:
                view["distance"] = node.child_distance
                view["children"] = [views.pop(node._left.id), views.pop(node._right.id)]
            views[node.id] = view
        return views[self.id]

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"BinaryTreeNode(id={self._id}, name={self._name!r})"
        return (
            f"BinaryTreeNode(id={self._id}, leaves={self._leaf_count}, "
            f"distance={self._child_distance:g})"
        )
