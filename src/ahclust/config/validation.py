"""Configuration validation for ahclust.

This module provides validation utilities for configuration values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .schema import AhcConfig, LogLevel


@dataclass
class ValidationError:
    """Represents a configuration validation error."""

    key: str
    message: str
    value: Any = None

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.key}: {self.message} (got: {self.value!r})"
        return f"{self.key}: {self.message}"


@dataclass
class ValidationResult:
    """Result of configuration validation."""

    valid: bool
    errors: list[ValidationError]
    warnings: list[ValidationError]

    def __bool__(self) -> bool:
        return self.valid


class ConfigValidationError(Exception):
    """Raised when a configuration fails validation.

    Attributes:
        errors: List of ValidationError objects describing what failed
        warnings: List of ValidationError objects for non-fatal issues
    """

    def __init__(
        self,
        message: str,
        errors: list[ValidationError],
        warnings: Optional[list[ValidationError]] = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors
        self.warnings = warnings or []

    def __str__(self) -> str:
        lines = [super().__str__()]
        if self.errors:
            lines.append("Errors:")
            for error in self.errors:
                lines.append(f"  - {error}")
        if self.warnings:
            lines.append("Warnings:")
            for warning in self.warnings:
                lines.append(f"  - {warning}")
        return "\n".join(lines)


def validate_config(config: AhcConfig) -> ValidationResult:
    """Validate a configuration instance.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with errors and warnings
    """
    errors: list[ValidationError] = []
    warnings: list[ValidationError] = []

    _validate_clustering(config, errors, warnings)
    _validate_logging(config, errors, warnings)

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def check_config(config: AhcConfig) -> None:
    """Raise ConfigValidationError if the configuration has errors."""
    result = validate_config(config)
    if not result:
        raise ConfigValidationError(
            "Invalid configuration", result.errors, result.warnings
        )


def _validate_clustering(
    config: AhcConfig,
    errors: list[ValidationError],
    warnings: list[ValidationError],
) -> None:
    """Validate clustering configuration."""
    # Import at runtime to avoid circular imports
    from ..distance import DISTANCES, get_distance
    from ..linkage import LINKAGES, get_linkage

    clustering = config.clustering

    distance_ok = clustering.distance in DISTANCES
    if not distance_ok:
        errors.append(
            ValidationError(
                "clustering.distance",
                f"must be one of {sorted(DISTANCES)}",
                clustering.distance,
            )
        )

    linkage_ok = clustering.linkage in LINKAGES
    if not linkage_ok:
        errors.append(
            ValidationError(
                "clustering.linkage",
                f"must be one of {sorted(LINKAGES)}",
                clustering.linkage,
            )
        )

    if distance_ok and linkage_ok:
        metric = get_distance(clustering.distance)
        if not get_linkage(clustering.linkage).is_compatible_with(metric):
            errors.append(
                ValidationError(
                    "clustering.linkage",
                    f"cannot be combined with distance '{clustering.distance}'",
                    clustering.linkage,
                )
            )
        if metric.min_features > 1:
            warnings.append(
                ValidationError(
                    "clustering.distance",
                    f"requires at least {metric.min_features} features per element",
                    clustering.distance,
                )
            )

    if not 0 <= clustering.verbosity <= 2:
        errors.append(
            ValidationError(
                "clustering.verbosity",
                "must be between 0 and 2",
                clustering.verbosity,
            )
        )


def _validate_logging(
    config: AhcConfig,
    errors: list[ValidationError],
    warnings: list[ValidationError],
) -> None:
    """Validate logging configuration."""
    valid_levels = {level.value for level in LogLevel}
    if str(config.logging.level).upper() not in valid_levels:
        errors.append(
            ValidationError(
                "logging.level",
                f"must be one of {sorted(valid_levels)}",
                config.logging.level,
            )
        )
