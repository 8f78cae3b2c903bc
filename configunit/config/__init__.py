"""Configuration management for configunit."""

from .loader import ConfigLoader, ConfigurationError, load_config
from .models import (
    DEFAULT_OPTIONS,
    DEMO_UNIT_OPTIONS,
    AppConfig,
    InvalidConfigurationError,
    UnitOptions,
    merge_options,
    resolve_options,
)

__all__ = [
    "AppConfig",
    "UnitOptions",
    "DEFAULT_OPTIONS",
    "DEMO_UNIT_OPTIONS",
    "merge_options",
    "resolve_options",
    "ConfigLoader",
    "load_config",
    "ConfigurationError",
    "InvalidConfigurationError",
]
