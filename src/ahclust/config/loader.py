"""Configuration loader for ahclust.

This module handles loading configuration from multiple sources:
1. Default values (lowest priority)
2. User config file (~/.config/ahclust/config.toml)
3. Project config file (ahclust.toml)
4. Environment variables (AHCLUST_* prefix)
5. Programmatic overrides (highest priority)
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

from .schema import AhcConfig, LoggingConfig

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

# Default paths
USER_CONFIG_DIR = Path.home() / ".config" / "ahclust"
USER_CONFIG_PATH = USER_CONFIG_DIR / "config.toml"
PROJECT_CONFIG_NAME = "ahclust.toml"
ENV_PREFIX = "AHCLUST_"

SECTIONS = {"clustering", "logging"}


def _parse_env_value(value: str) -> Any:
    """Parse an environment variable value to appropriate Python type."""
    # Handle booleans
    if value.lower() in ("true", "yes", "on"):
        return True
    if value.lower() in ("false", "no", "off"):
        return False

    # Handle None
    if value.lower() in ("none", "null", ""):
        return None

    # Try numeric types
    try:
        if "." in value:
            return float(value)
        return int(value)
    except ValueError:
        pass

    return value


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class ConfigLoader:
    """Load configuration from multiple sources with priority handling."""

    def __init__(
        self,
        project_path: Optional[Path] = None,
        user_config_path: Optional[Path] = None,
        environ: Optional[dict[str, str]] = None,
    ):
        """Initialize the configuration loader.

        Args:
            project_path: Directory containing ahclust.toml, or the file itself
            user_config_path: Optional override for user config path
            environ: Environment mapping (defaults to os.environ)
        """
        self.project_path = Path(project_path) if project_path else None
        self.user_config_path = Path(user_config_path or USER_CONFIG_PATH)
        self.environ = environ if environ is not None else os.environ

    def load(self) -> AhcConfig:
        """Load configuration from all sources with priority handling.

        Returns:
            Merged AhcConfig instance
        """
        config_dict: dict[str, Any] = {}

        if self.user_config_path.exists():
            config_dict = _deep_merge(config_dict, self._load_toml(self.user_config_path))
            logger.debug(f"Loaded user config from {self.user_config_path}")

        project_file = self._project_file()
        if project_file is not None and project_file.exists():
            config_dict = _deep_merge(config_dict, self._load_toml(project_file))
            logger.debug(f"Loaded project config from {project_file}")

        env_overrides = self._load_env_vars()
        if env_overrides:
            config_dict = _deep_merge(config_dict, env_overrides)
            logger.debug("Applied environment variable overrides")

        return AhcConfig.from_dict(config_dict)

    def _project_file(self) -> Optional[Path]:
        if self.project_path is None:
            return None
        if self.project_path.suffix == ".toml":
            return self.project_path
        return self.project_path / PROJECT_CONFIG_NAME

    def _load_toml(self, path: Path) -> dict[str, Any]:
        """Load a TOML configuration file.

        Raises:
            tomllib.TOMLDecodeError: If the file is not valid TOML
        """
        with open(path, "rb") as f:
            return tomllib.load(f)

    def _load_env_vars(self) -> dict[str, Any]:
        """Load configuration from environment variables.

        Variables are prefixed with AHCLUST_ and name the section first:
        - AHCLUST_CLUSTERING_LINKAGE -> clustering.linkage
        - AHCLUST_CLUSTERING_SORT_LEAVES -> clustering.sort_leaves
        - AHCLUST_LOGGING_LEVEL -> logging.level

        Returns:
            Configuration dictionary from environment variables
        """
        result: dict[str, Any] = {}

        for key, value in self.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            parts = key[len(ENV_PREFIX) :].lower().split("_")
            if parts[0] not in SECTIONS or len(parts) < 2:
                logger.warning(f"Ignoring unknown configuration variable {key}")
                continue

            nested = {parts[0]: {"_".join(parts[1:]): _parse_env_value(value)}}
            result = _deep_merge(result, nested)

        return result


def load_config(
    project_path: Optional[Path] = None,
    user_config_path: Optional[Path] = None,
) -> AhcConfig:
    """Load ahclust configuration from all sources.

    This is the main entry point for loading configuration.

    Args:
        project_path: Optional directory holding ahclust.toml (or the file)
        user_config_path: Optional override for user config path

    Returns:
        Merged AhcConfig instance
    """
    loader = ConfigLoader(project_path, user_config_path)
    return loader.load()


def get_default_config() -> AhcConfig:
    """Get an AhcConfig with all default values."""
    return AhcConfig()


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """Attach handlers to the ``ahclust`` logger as described by the config.

    Existing handlers on the package logger are replaced, so calling this
    twice does not duplicate output.

    Args:
        config: Logging section of the configuration

    Returns:
        The configured package logger
    """
    package_logger = logging.getLogger("ahclust")
    package_logger.setLevel(config.level.upper())

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.format)
    handlers: list[logging.Handler] = []
    if config.console:
        handlers.append(logging.StreamHandler())
    if config.file:
        handlers.append(logging.FileHandler(Path(config.file).expanduser()))

    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    return package_logger
