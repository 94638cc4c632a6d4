"""Labelled numeric grid used for raw data and distance matrices."""

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..exceptions import InvalidShapeError

logger = logging.getLogger(__name__)


class DataMatrix:
    """
    Rectangular grid of real values with element and feature labels.

    The first axis indexes elements (the objects being clustered), the second
    axis indexes features. ``m[i, k]`` is feature ``k`` of element ``i``.
    Distance matrices reuse the same type with the element names on both axes.

    Permutation methods never reorder an existing instance; they return a new
    matrix with relabelled axes.

    Example:
        >>> m = DataMatrix(["a", "b"], ["x"], [[1.0], [2.0]])
        >>> m.element(1)
        array([2.])
    """

    def __init__(
        self,
        element_names: Sequence[str],
        feature_names: Sequence[str],
        data: Optional[Any] = None,
    ):
        self._element_names = [str(name) for name in element_names]
        self._feature_names = [str(name) for name in feature_names]

        shape = (len(self._element_names), len(self._feature_names))
        if data is None:
            self._data = np.zeros(shape, dtype=np.float64)
        else:
            array = np.array(data, dtype=np.float64)
            if array.shape != shape:
                raise InvalidShapeError(
                    f"Data of shape {array.shape} does not match "
                    f"{shape[0]} element and {shape[1]} feature labels"
                )
            self._data = array

    @classmethod
    def with_size(cls, element_count: int, feature_count: int) -> "DataMatrix":
        """Create a zero matrix labelled E1..En and F1..Fm."""
        if element_count < 0 or feature_count < 0:
            raise InvalidShapeError("Matrix dimensions must be non-negative")
        return cls(
            [f"E{i}" for i in range(1, element_count + 1)],
            [f"F{i}" for i in range(1, feature_count + 1)],
        )

    @classmethod
    def from_array(
        cls,
        array: Any,
        element_names: Optional[Sequence[str]] = None,
        feature_names: Optional[Sequence[str]] = None,
    ) -> "DataMatrix":
        """
        Wrap a 2-D array with one row per element.

        Args:
            array: Array-like of shape (n_elements, n_features)
            element_names: Optional element labels (defaults to E1..En)
            feature_names: Optional feature labels (defaults to F1..Fm)

        Returns:
            New DataMatrix holding a copy of the values
        """
        values = np.array(array, dtype=np.float64)
        if values.ndim != 2:
            raise InvalidShapeError(
                f"Expected a 2-D array, got {values.ndim} dimension(s)"
            )
        n, m = values.shape
        if element_names is None:
            element_names = [f"E{i}" for i in range(1, n + 1)]
        if feature_names is None:
            feature_names = [f"F{i}" for i in range(1, m + 1)]
        return cls(element_names, feature_names, values)

    @classmethod
    def random(
        cls, element_count: int, feature_count: int, seed: Optional[int] = None
    ) -> "DataMatrix":
        """Create a default-labelled matrix filled uniformly from [0, 1)."""
        matrix = cls.with_size(element_count, feature_count)
        rng = np.random.default_rng(seed)
        matrix._data[:] = rng.random((element_count, feature_count))
        return matrix

    @property
    def data(self) -> np.ndarray:
        """Underlying grid, shape (element_count, feature_count)."""
        return self._data

    @property
    def element_names(self) -> List[str]:
        return list(self._element_names)

    @property
    def feature_names(self) -> List[str]:
        return list(self._feature_names)

    @property
    def element_count(self) -> int:
        return len(self._element_names)

    @property
    def feature_count(self) -> int:
        return len(self._feature_names)

    @property
    def shape(self) -> tuple:
        return self._data.shape

    @property
    def is_square(self) -> bool:
        """True if there are as many features as elements."""
        return self.element_count == self.feature_count

    def __getitem__(self, index):
        return self._data[index]

    def __setitem__(self, index, value) -> None:
        self._data[index] = value

    def __repr__(self) -> str:
        return (
            f"DataMatrix(elements={self.element_count}, "
            f"features={self.feature_count})"
        )

    def element(self, index: int) -> np.ndarray:
        """Return a copy of the feature vector of one element."""
        return self._data[index].copy()

    def row_and_column_permuted(self, permutation: Sequence[int]) -> "DataMatrix":
        """
        Reorder both axes of a square matrix.

        Entry ``(i, j)`` moves to ``(permutation[i], permutation[j])``.

        Raises:
            InvalidShapeError: If the matrix is not square or the permutation
                length differs from the dimension
        """
        if not self.is_square:
            raise InvalidShapeError(
                f"Cannot run row-and-column permutation on a "
                f"{self.element_count}x{self.feature_count} matrix"
            )
        perm = self._check_permutation(permutation, self.element_count, "square matrix")

        data = np.empty_like(self._data)
        data[np.ix_(perm, perm)] = self._data
        return DataMatrix(
            _reorder(self._element_names, perm),
            _reorder(self._feature_names, perm),
            data,
        )

    def column_permuted(self, permutation: Sequence[int]) -> "DataMatrix":
        """Reorder the elements; element ``i`` moves to ``permutation[i]``."""
        perm = self._check_permutation(permutation, self.element_count, "element axis")

        data = np.empty_like(self._data)
        data[perm, :] = self._data
        return DataMatrix(
            _reorder(self._element_names, perm), self._feature_names, data
        )

    def row_permuted(self, permutation: Sequence[int]) -> "DataMatrix":
        """Reorder the features; feature ``k`` moves to ``permutation[k]``."""
        perm = self._check_permutation(permutation, self.feature_count, "feature axis")

        data = np.empty_like(self._data)
        data[:, perm] = self._data
        return DataMatrix(
            self._element_names, _reorder(self._feature_names, perm), data
        )

    def _check_permutation(
        self, permutation: Sequence[int], size: int, target: str
    ) -> np.ndarray:
        perm = np.asarray(permutation, dtype=np.intp)
        if perm.ndim != 1 or len(perm) != size:
            raise InvalidShapeError(
                f"Cannot apply permutation of length {len(perm)} "
                f"on a {target} of dimension {size}"
            )
        if not np.array_equal(np.sort(perm), np.arange(size)):
            raise ValueError(f"Not a permutation of 0..{size - 1}: {perm.tolist()}")
        return perm

    def format(self, precision: int = 3) -> str:
        """
        Render the matrix as a fixed-width table, elements as columns.

        Used for diagnostic dumps only.
        """
        lines = [" " * 30 + "".join(name.rjust(20) for name in self._element_names)]
        for k, feature in enumerate(self._feature_names):
            values = "".join(
                f"{self._data[i, k]:.{precision}f}".rjust(20)
                for i in range(self.element_count)
            )
            lines.append(feature.rjust(30) + values)
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "element_names": self.element_names,
            "feature_names": self.feature_names,
            "data": self._data.tolist(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataMatrix":
        """Create from dictionary."""
        return cls(data["element_names"], data["feature_names"], data["data"])


def _reorder(names: List[str], perm: np.ndarray) -> List[str]:
    reordered = [""] * len(names)
    for old, new in enumerate(perm):
        reordered[new] = names[old]
    return reordered
