"""Configuration schema dataclasses for ahclust.

This module defines all configuration options as typed dataclasses,
providing a single source of truth for default values and types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class ClusteringConfig:
    """Clustering run settings."""

    distance: str = "euclidean"
    linkage: str = "single"
    verbosity: int = 0  # 0: silent, 1: merges, 2: merges + matrices
    sort_leaves: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not 0 <= self.verbosity <= 2:
            raise ValueError("verbosity must be between 0 and 2")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "distance": self.distance,
            "linkage": self.linkage,
            "verbosity": self.verbosity,
            "sort_leaves": self.sort_leaves,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClusteringConfig:
        """Create from dictionary."""
        return cls(
            distance=data.get("distance", "euclidean"),
            linkage=data.get("linkage", "single"),
            verbosity=data.get("verbosity", 0),
            sort_leaves=data.get("sort_leaves", False),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(levelname)s - %(name)s - %(message)s"
    file: Optional[str] = None
    console: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "level": self.level,
            "format": self.format,
            "file": self.file,
            "console": self.console,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LoggingConfig:
        """Create from dictionary."""
        return cls(
            level=data.get("level", "INFO"),
            format=data.get("format", "%(levelname)s - %(name)s - %(message)s"),
            file=data.get("file"),
            console=data.get("console", True),
        )


@dataclass
class AhcConfig:
    """Main configuration container for ahclust.

    Configuration is loaded from multiple sources with the following priority:
    1. Programmatic (highest) - Direct API calls
    2. Environment Variables - AHCLUST_* prefixed
    3. Project Config - ./ahclust.toml
    4. User Config - ~/.config/ahclust/config.toml
    5. Defaults (lowest) - Built-in defaults
    """

    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "clustering": self.clustering.to_dict(),
            "logging": self.logging.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AhcConfig:
        """Create configuration from dictionary."""
        return cls(
            clustering=ClusteringConfig.from_dict(data.get("clustering", {})),
            logging=LoggingConfig.from_dict(data.get("logging", {})),
        )

    def get_nested(self, key: str, default: Any = None) -> Any:
        """Get a nested configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., "clustering.linkage")
            default: Default value if key not found

        Returns:
            The configuration value or default
        """
        parts = key.split(".")
        obj: Any = self
        for part in parts:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            elif isinstance(obj, dict) and part in obj:
                obj = obj[part]
            else:
                return default
        return obj

    def set_nested(self, key: str, value: Any) -> None:
        """Set a nested configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., "clustering.linkage")
            value: Value to set
        """
        parts = key.split(".")
        obj: Any = self
        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise KeyError(f"Invalid configuration key: {key}")
        if not hasattr(obj, parts[-1]):
            raise KeyError(f"Invalid configuration key: {key}")
        setattr(obj, parts[-1], value)
