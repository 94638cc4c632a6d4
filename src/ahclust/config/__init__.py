"""Configuration system for ahclust.

Configuration Sources (Priority Order):
1. Programmatic (highest) - Direct API calls
2. Environment Variables - AHCLUST_* prefixed variables
3. Project Config - ./ahclust.toml
4. User Config - ~/.config/ahclust/config.toml
5. Defaults (lowest) - Built-in defaults

Example Usage:
    from ahclust.config import load_config
    from ahclust import AhcAlgorithm

    config = load_config(project_path=Path("."))
    ahc = AhcAlgorithm.from_config(config)

Environment Variables:
    - AHCLUST_CLUSTERING_DISTANCE=pearson
    - AHCLUST_CLUSTERING_LINKAGE=complete
    - AHCLUST_LOGGING_LEVEL=DEBUG
"""

from .loader import (
    ConfigLoader,
    configure_logging,
    get_default_config,
    load_config,
)
from .schema import (
    AhcConfig,
    ClusteringConfig,
    LoggingConfig,
    LogLevel,
)
from .validation import (
    ConfigValidationError,
    ValidationError,
    ValidationResult,
    check_config,
    validate_config,
)

__all__ = [
    # Main config class
    "AhcConfig",
    # Section configs
    "ClusteringConfig",
    "LoggingConfig",
    # Enums
    "LogLevel",
    # Loader
    "ConfigLoader",
    "load_config",
    "get_default_config",
    "configure_logging",
    # Validation
    "validate_config",
    "check_config",
    "ValidationError",
    "ValidationResult",
    "ConfigValidationError",
]
