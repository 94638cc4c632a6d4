"""Clustering engine and run diagnostics."""

from .diagnostics import RunDiagnostics
from .engine import AhcAlgorithm, MergeStep, cluster, cluster_from_config

__all__ = [
    "AhcAlgorithm",
    "MergeStep",
    "RunDiagnostics",
    "cluster",
    "cluster_from_config",
]
