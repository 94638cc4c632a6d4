"""
ahclust: agglomerative hierarchical clustering with optimal leaf ordering
"""

__version__ = "1.0.0"

from ahclust.clustering import (
    AhcAlgorithm,
    MergeStep,
    RunDiagnostics,
    cluster,
    cluster_from_config,
)
from ahclust.config import (
    AhcConfig,
    ClusteringConfig,
    LoggingConfig,
    configure_logging,
    get_default_config,
    load_config,
    validate_config,
)
from ahclust.core import BinaryTreeNode, DataMatrix
from ahclust.distance import (
    ChebyshevDistance,
    CityBlockDistance,
    DistanceMetric,
    DistanceType,
    EuclideanDistance,
    PearsonDistance,
    get_distance,
)
from ahclust.exceptions import (
    AhcError,
    ConfigurationError,
    DegenerateDataError,
    IncompleteError,
    InvalidShapeError,
    NotReadyError,
)
from ahclust.linkage import (
    AverageLinkage,
    CompleteLinkage,
    Linkage,
    LinkageType,
    SingleLinkage,
    WardLinkage,
    WeightedAverageLinkage,
    get_linkage,
)

__all__ = [
    # Engine
    "AhcAlgorithm",
    "MergeStep",
    "RunDiagnostics",
    "cluster",
    "cluster_from_config",
    # Containers
    "DataMatrix",
    "BinaryTreeNode",
    # Distance metrics
    "DistanceMetric",
    "DistanceType",
    "EuclideanDistance",
    "CityBlockDistance",
    "ChebyshevDistance",
    "PearsonDistance",
    "get_distance",
    # Linkage rules
    "Linkage",
    "LinkageType",
    "SingleLinkage",
    "CompleteLinkage",
    "AverageLinkage",
    "WeightedAverageLinkage",
    "WardLinkage",
    "get_linkage",
    # Errors
    "AhcError",
    "ConfigurationError",
    "NotReadyError",
    "IncompleteError",
    "InvalidShapeError",
    "DegenerateDataError",
    # Configuration
    "AhcConfig",
    "ClusteringConfig",
    "LoggingConfig",
    "load_config",
    "get_default_config",
    "validate_config",
    "configure_logging",
]
