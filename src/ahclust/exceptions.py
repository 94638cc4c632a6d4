"""Error types raised by ahclust."""


class AhcError(Exception):
    """Base class for all clustering errors."""

    pass


class ConfigurationError(AhcError):
    """Raised when the distance metric, linkage rule or data are incompatible."""

    pass


class NotReadyError(AhcError):
    """Raised when results are requested before data was set or a run completed."""

    pass


class IncompleteError(AhcError):
    """Raised when a run did not converge to a single cluster."""

    pass


class InvalidShapeError(AhcError, ValueError):
    """Raised for non-square matrices or permutations of the wrong length."""

    pass


class DegenerateDataError(AhcError, ValueError):
    """Raised when a distance is undefined for the given vectors."""

    pass
