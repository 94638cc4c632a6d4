"""Core data containers: the labelled data matrix and the merge tree."""

from .data_matrix import DataMatrix
from .tree import BinaryTreeNode

__all__ = ["DataMatrix", "BinaryTreeNode"]
