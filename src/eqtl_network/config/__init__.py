from .loader import (
    ConfigOverrideError,
    apply_overrides,
    load_config,
    load_config_with_overrides,
)
from .schema import NetworkConfig, SourceConfig, APIConfig, DisplayConfig, CatalogEntry

__all__ = [
    "ConfigOverrideError",
    "apply_overrides",
    "load_config",
    "load_config_with_overrides",
    "NetworkConfig",
    "SourceConfig",
    "APIConfig",
    "DisplayConfig",
    "CatalogEntry",
]
