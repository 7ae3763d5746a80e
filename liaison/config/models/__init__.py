"""Configuration model exports.

    from liaison.config.models import OwnerStoreConfig, StorageConfig
"""

from liaison.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)
from liaison.config.models.storage import (
    OwnerStoreConfig,
    StorageConfig,
)

__all__ = [
    # Observability
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    # Storage
    "OwnerStoreConfig",
    "StorageConfig",
]
