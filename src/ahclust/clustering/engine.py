"""
Agglomerative hierarchical clustering engine.

This module provides the clustering run itself:
- Pairwise distance computation with a pluggable metric
- Iterative merging of the two closest clusters with a shrinking
  triangular distance matrix
- Cluster distance updates through a pluggable linkage rule
- Leaf permutation of the resulting merge tree
- Optimal leaf ordering by flipping subtrees
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import numpy as np

from ..core.data_matrix import DataMatrix
from ..core.tree import BinaryTreeNode
from ..distance import DistanceMetric, EuclideanDistance, get_distance
from ..exceptions import (
    ConfigurationError,
    IncompleteError,
    NotReadyError,
)
from ..linkage import Linkage, SingleLinkage, get_linkage
from .diagnostics import RunDiagnostics

logger = logging.getLogger(__name__)


@dataclass
class MergeStep:
    """Record of one merge performed during a run."""

    step: int  # 0-based merge number
    node_id: int  # Id of the node created by the merge
    left_id: int
    right_id: int
    distance: float
    leaf_count: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "step": self.step,
            "node_id": self.node_id,
            "left_id": self.left_id,
            "right_id": self.right_id,
            "distance": self.distance,
            "leaf_count": self.leaf_count,
        }


class AhcAlgorithm:
    """
    Agglomerative hierarchical clustering over the elements of a DataMatrix.

    Usage:
        - create an instance, optionally choosing the distance metric and the
          linkage rule (defaults: squared Euclidean, single linkage)
        - provide the data with :meth:`set_data`
        - call :meth:`run`
        - read :attr:`tree` and :attr:`permutation`, optionally after
          :meth:`sort_leaves`

    The permutation maps each original element index to its position in the
    left-to-right leaf order of the tree.

    An instance holds mutable run state and is not thread-safe; callers
    sharing one must serialize access.

    Example:
        >>> ahc = AhcAlgorithm(linkage="complete")
        >>> ahc.set_data([[1.0], [2.0], [10.0], [11.0]])
        >>> ahc.run()
        >>> ahc.tree.leaf_count
        4
    """

    def __init__(
        self,
        distance: Union[DistanceMetric, str, None] = None,
        linkage: Union[Linkage, str, None] = None,
        verbosity: int = 0,
    ):
        self.distance = distance if distance is not None else EuclideanDistance()
        self.linkage = linkage if linkage is not None else SingleLinkage()
        self.verbosity = verbosity

        self._raw_data: Optional[DataMatrix] = None
        self._reset()

    @classmethod
    def from_config(cls, config: Any) -> "AhcAlgorithm":
        """
        Create an engine from an AhcConfig or its clustering section.

        Args:
            config: AhcConfig or ClusteringConfig instance

        Returns:
            Configured engine (without data)
        """
        section = getattr(config, "clustering", config)
        return cls(
            distance=section.distance,
            linkage=section.linkage,
            verbosity=section.verbosity,
        )

    def _reset(self) -> None:
        self._distance_matrix: Optional[DataMatrix] = None
        self._temp_distance_matrix: Optional[DataMatrix] = None
        self._nodes: List[BinaryTreeNode] = []
        self._node_idx = 0
        self._permutation = np.zeros(0, dtype=np.intp)
        self._merges: List[MergeStep] = []
        self._run_started = False

    # Strategy properties

    @property
    def distance(self) -> DistanceMetric:
        """Metric used for the initial pairwise distances."""
        return self._distance

    @distance.setter
    def distance(self, value: Union[DistanceMetric, str]) -> None:
        self._distance = value if isinstance(value, DistanceMetric) else get_distance(value)

    @property
    def linkage(self) -> Linkage:
        """Rule used to update cluster distances after each merge."""
        return self._linkage

    @linkage.setter
    def linkage(self, value: Union[Linkage, str]) -> None:
        self._linkage = value if isinstance(value, Linkage) else get_linkage(value)

    @property
    def verbosity(self) -> int:
        """0: silent, 1: log merges, 2: also log distance matrices."""
        return self._diagnostics.verbosity

    @verbosity.setter
    def verbosity(self, value: int) -> None:
        self._diagnostics = RunDiagnostics(value)

    # Data and results

    def set_data(self, data: Any) -> None:
        """
        Set the raw data and discard any previous run.

        Args:
            data: DataMatrix, or 2-D array-like with one row per element
        """
        if not isinstance(data, DataMatrix):
            data = DataMatrix.from_array(data)
        self._raw_data = data
        self._reset()

    @property
    def data(self) -> Optional[DataMatrix]:
        return self._raw_data

    @property
    def tree(self) -> BinaryTreeNode:
        """
        Root of the merge tree.

        Raises:
            NotReadyError: If no run has been started
            IncompleteError: If the run did not end with a single cluster
        """
        self._check_finished()
        return self._nodes[0]

    def _check_finished(self) -> None:
        if not self._run_started:
            raise NotReadyError("No tree data available")
        if len(self._nodes) != 1:
            raise IncompleteError(
                f"Algorithm didn't finish successfully: "
                f"{len(self._nodes)} clusters remain"
            )

    @property
    def permutation(self) -> np.ndarray:
        """Position of each original element in the leaf order."""
        self._check_finished()
        return self._permutation.copy()

    @property
    def distance_matrix(self) -> DataMatrix:
        """Initial triangular distance matrix of the last run."""
        if self._distance_matrix is None:
            raise NotReadyError("No distance matrix available")
        return self._distance_matrix

    @property
    def merges(self) -> List[MergeStep]:
        """Merges of the last run, in order."""
        self._check_finished()
        return list(self._merges)

    # Clustering

    def run(self) -> None:
        """
        Cluster the data set with :meth:`set_data`.

        Raises:
            NotReadyError: If no data was set
            ConfigurationError: If the data is empty, the linkage rule does
                not fit the metric, or there are too few features
        """
        if self._raw_data is None:
            raise NotReadyError("No raw data set")

        self._check_configuration(self._raw_data)
        self._reset()
        self._run_started = True

        logger.debug(
            f"Clustering {self._raw_data.element_count} elements with "
            f"{self._distance.name} and {self._linkage.name}"
        )

        self._distance_matrix = self._calculate_distance_matrix(self._raw_data)
        self._temp_distance_matrix = self._distance_matrix

        self._nodes = self._create_leaf_nodes(self._raw_data)

        while self._temp_distance_matrix.element_count > 1:
            self._merge_closest_clusters()

        self._permutation = self._build_permutation()

    def _check_configuration(self, data: DataMatrix) -> None:
        if data.element_count == 0:
            raise ConfigurationError("Cannot cluster an empty data matrix")

        if not self._linkage.is_compatible_with(self._distance):
            raise ConfigurationError(
                f"{self._linkage.name} cannot run with {self._distance.name}; "
                f"it requires Euclidean distance"
            )

        if data.feature_count < self._distance.min_features:
            raise ConfigurationError(
                f"{self._distance.name} requires that the elements have at least "
                f"{self._distance.min_features} features, got {data.feature_count}"
            )

    def _calculate_distance_matrix(self, data: DataMatrix) -> DataMatrix:
        """
        Distances between all element pairs, stored at ``[i, j]`` with ``i < j``.
        """
        n = data.element_count
        names = data.element_names
        dist = DataMatrix(names, names)

        for j in range(1, n):
            v2 = data.element(j)
            for i in range(j):
                dist[i, j] = self._distance.distance(data.element(i), v2)

        self._diagnostics.distance_matrix(dist, self._distance.name)
        return dist

    def _create_leaf_nodes(self, data: DataMatrix) -> List[BinaryTreeNode]:
        nodes = []
        for name in data.element_names:
            nodes.append(BinaryTreeNode.leaf(self._node_idx, name))
            self._node_idx += 1
        return nodes

    def _merge_closest_clusters(self) -> None:
        c1, c2, d = self._find_closest_clusters(self._temp_distance_matrix.data)

        new_matrix = self._update_distance_matrix(c1, c2)

        names = self._temp_distance_matrix.element_names
        self._diagnostics.merged(names[c1], names[c2], d)
        self._diagnostics.intermediate_matrix(
            new_matrix, self._raw_data.element_count - new_matrix.element_count
        )

        self._temp_distance_matrix = new_matrix
        self._nodes = self._update_nodes(c1, c2, d)

    @staticmethod
    def _find_closest_clusters(distances: np.ndarray):
        """
        Locate the smallest entry of the triangular matrix.

        Entries are scanned with the larger index in the outer loop and the
        smaller in the inner loop; the first strict minimum wins ties.

        Returns:
            Tuple of (smaller index, larger index, distance)
        """
        larger, smaller = np.tril_indices(distances.shape[0], -1)
        values = distances[smaller, larger]
        idx = int(np.argmin(values))
        return int(smaller[idx]), int(larger[idx]), float(values[idx])

    def _update_distance_matrix(self, c1: int, c2: int) -> DataMatrix:
        """
        Build the matrix for one cluster fewer.

        The merged cluster takes slot 0. Surviving clusters keep their
        relative order in slots 1..k-2; their mutual distances are copied and
        their distances to the merged cluster come from the linkage rule.
        """
        old = self._temp_distance_matrix
        old_names = old.element_names
        survivors = [i for i in range(old.element_count) if i != c1 and i != c2]

        new_names = [f"{old_names[c1]},{old_names[c2]}"]
        new_names.extend(old_names[i] for i in survivors)

        data = np.zeros((len(new_names), len(new_names)), dtype=np.float64)
        for m, r in enumerate(survivors, start=1):
            data[0, m] = self._linkage.distance(c1, c2, r, old.data, self._nodes)

        if survivors:
            data[1:, 1:] = np.triu(old.data[np.ix_(survivors, survivors)], 1)

        return DataMatrix(new_names, new_names, data)

    def _update_nodes(self, c1: int, c2: int, d: float) -> List[BinaryTreeNode]:
        left, right = self._nodes[c1], self._nodes[c2]
        merged = BinaryTreeNode.merge(self._node_idx, left, right, d)
        self._node_idx += 1

        self._merges.append(
            MergeStep(
                step=len(self._merges),
                node_id=merged.id,
                left_id=left.id,
                right_id=right.id,
                distance=d,
                leaf_count=merged.leaf_count,
            )
        )

        nodes = [merged]
        nodes.extend(
            node for i, node in enumerate(self._nodes) if i != c1 and i != c2
        )
        return nodes

    def _build_permutation(self) -> np.ndarray:
        """
        Map each original element to its position in the leaf order.

        Output like 3, 1, 0, ... means the first element is now at position 3.
        """
        permutation = np.empty(self._raw_data.element_count, dtype=np.intp)
        for position, leaf in enumerate(self.tree.leaves()):
            permutation[leaf.id] = position
        return permutation

    # Leaf ordering

    def sort_leaves(self) -> float:
        """
        Flip subtrees so that adjacent leaves are as close as possible.

        At every internal node, bottom-up, the four combinations of flipping
        the children are tried in the order none, left, both, right, and the
        first one with the smallest boundary distance is kept. The
        permutation is rebuilt afterwards.

        Returns:
            Sum of the distances between adjacent leaves after sorting

        Raises:
            NotReadyError: If no run has been started
            IncompleteError: If the run did not finish
        """
        root = self.tree

        full = self._symmetric_distances()
        names = self._distance_matrix.element_names
        dist = DataMatrix(names, names, full).row_and_column_permuted(
            self._permutation
        )

        cost = self._optimal_ordering(root, dist.data, self._permutation)
        self._permutation = self._build_permutation()

        logger.debug(f"Sorted leaves, adjacent distance sum {cost:g}")
        return cost

    def _symmetric_distances(self) -> np.ndarray:
        upper = self._distance_matrix.data
        return upper + upper.T

    @staticmethod
    def _optimal_ordering(
        root: BinaryTreeNode, dist: np.ndarray, permutation: np.ndarray
    ) -> float:
        """
        Optimise the subtree orientation below ``root`` in place.

        ``dist`` is indexed by leaf position under ``permutation``, which is
        held fixed for the whole pass.
        """

        def leaf_distance(a: BinaryTreeNode, b: BinaryTreeNode) -> float:
            return float(dist[permutation[a.id], permutation[b.id]])

        costs: Dict[int, float] = {}

        # Reversed pre-order visits every node after all of its descendants
        for node in reversed(list(root.iter_nodes())):
            if node.leaf_count == 1:
                costs[node.id] = 0.0
                continue

            left, right = node.left_child, node.right_child
            if node.leaf_count == 2:
                costs[node.id] = leaf_distance(left, right)
                continue

            inner = costs[left.id] + costs[right.id]

            # 0: none flipped, 1: left flipped, 2: both flipped, 3: right flipped
            candidates = [0.0] * 4
            left.flip()
            candidates[1] = inner + leaf_distance(left.right_leaf, right.left_leaf)
            right.flip()
            candidates[2] = inner + leaf_distance(left.right_leaf, right.left_leaf)
            left.flip()
            candidates[3] = inner + leaf_distance(left.right_leaf, right.left_leaf)
            right.flip()
            candidates[0] = inner + leaf_distance(left.right_leaf, right.left_leaf)

            best = int(np.argmin(candidates))
            if best == 1:
                left.flip()
            elif best == 2:
                left.flip()
                right.flip()
            elif best == 3:
                right.flip()

            costs[node.id] = candidates[best]

        return costs[root.id]

    def ordering_cost(self) -> float:
        """Sum of the distances between adjacent leaves in the current order."""
        leaves = self.tree.leaves()
        full = self._symmetric_distances()
        return float(
            sum(full[a.id, b.id] for a, b in zip(leaves, leaves[1:]))
        )

    # Views for callers

    def linkage_matrix(self) -> np.ndarray:
        """
        Merge history in scipy's linkage format.

        Row ``i`` holds ``[left id, right id, distance, leaf count]`` of the
        node with id ``n + i``, so the result can be passed to
        ``scipy.cluster.hierarchy.dendrogram``.
        """
        merges = self.merges
        z = np.zeros((len(merges), 4), dtype=np.float64)
        for i, merge in enumerate(merges):
            z[i] = (merge.left_id, merge.right_id, merge.distance, merge.leaf_count)
        return z

    def ordered_data(self) -> DataMatrix:
        """Raw data with the elements in leaf order."""
        return self._raw_data.column_permuted(self.permutation)


def cluster(
    data: Any,
    distance: Union[DistanceMetric, str] = "euclidean",
    linkage: Union[Linkage, str] = "single",
    sort_leaves: bool = False,
    verbosity: int = 0,
) -> AhcAlgorithm:
    """
    Run a complete clustering in one call.

    Args:
        data: DataMatrix or 2-D array-like with one row per element
        distance: Metric instance or registry name
        linkage: Linkage instance or registry name
        sort_leaves: Whether to optimise the leaf order afterwards
        verbosity: Diagnostic level (0-2)

    Returns:
        Engine holding the finished run
    """
    ahc = AhcAlgorithm(distance=distance, linkage=linkage, verbosity=verbosity)
    ahc.set_data(data)
    ahc.run()
    if sort_leaves:
        ahc.sort_leaves()
    return ahc


def cluster_from_config(data: Any, config: Any) -> AhcAlgorithm:
    """
    Run a complete clustering with the settings of an AhcConfig.

    Args:
        data: DataMatrix or 2-D array-like with one row per element
        config: AhcConfig or ClusteringConfig instance

    Returns:
        Engine holding the finished run
    """
    section = getattr(config, "clustering", config)
    ahc = AhcAlgorithm.from_config(section)
    ahc.set_data(data)
    ahc.run()
    if section.sort_leaves:
        ahc.sort_leaves()
    return ahc
