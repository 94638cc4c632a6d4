"""Verbosity-gated run diagnostics routed through logging."""

import logging

from ..core.data_matrix import DataMatrix

logger = logging.getLogger(__name__)

SILENT = 0
MERGES = 1
MATRICES = 2


class RunDiagnostics:
    """
    Reports the progress of a clustering run.

    Levels:
        0: nothing is reported
        1: each merge, by cluster name
        2: merges plus every intermediate distance matrix
    """

    def __init__(self, verbosity: int = SILENT, precision: int = 3):
        if not SILENT <= verbosity <= MATRICES:
            raise ValueError(f"verbosity must be between {SILENT} and {MATRICES}")
        self.verbosity = verbosity
        self.precision = precision

    def distance_matrix(self, matrix: DataMatrix, metric_name: str) -> None:
        if self.verbosity >= MATRICES:
            logger.info(
                f"{metric_name} distance matrix\n{matrix.format(self.precision)}"
            )

    def merged(self, left_name: str, right_name: str, distance: float) -> None:
        if self.verbosity >= MERGES:
            logger.info(f"Merged {left_name} with {right_name} at {distance:g}")

    def intermediate_matrix(self, matrix: DataMatrix, step: int) -> None:
        if self.verbosity >= MATRICES:
            logger.info(f"Temp matrix {step}\n{matrix.format(self.precision)}")
