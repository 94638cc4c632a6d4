"""Linkage rules for updating cluster distances after a merge."""

from enum import Enum
from typing import Union

from ..exceptions import ConfigurationError
from .average import AverageLinkage
from .base import Linkage
from .complete import CompleteLinkage
from .single import SingleLinkage
from .ward import WardLinkage
from .weighted import WeightedAverageLinkage

__all__ = [
    "Linkage",
    "LinkageType",
    "SingleLinkage",
    "CompleteLinkage",
    "AverageLinkage",
    "WeightedAverageLinkage",
    "WardLinkage",
    "LINKAGES",
    "get_linkage",
]


class LinkageType(str, Enum):
    """Names of the available linkage rules."""

    SINGLE = "single"
    COMPLETE = "complete"
    AVERAGE = "average"
    WEIGHTED_AVERAGE = "weighted_average"
    WARD = "ward"


# Linkage registry for lookup by name
LINKAGES = {
    LinkageType.SINGLE.value: SingleLinkage,
    LinkageType.COMPLETE.value: CompleteLinkage,
    LinkageType.AVERAGE.value: AverageLinkage,
    LinkageType.WEIGHTED_AVERAGE.value: WeightedAverageLinkage,
    LinkageType.WARD.value: WardLinkage,
}


def get_linkage(name: Union[str, LinkageType]) -> Linkage:
    """
    Get a linkage rule by name.

    Args:
        name: Linkage name ('single', 'complete', 'average',
            'weighted_average', 'ward')

    Returns:
        New linkage instance

    Raises:
        ConfigurationError: If the name is not recognized
    """
    key = name.value if isinstance(name, LinkageType) else str(name).lower()
    if key not in LINKAGES:
        raise ConfigurationError(
            f"Unknown linkage method: {name}. "
            f"Available methods: {list(LINKAGES.keys())}"
        )
    return LINKAGES[key]()
