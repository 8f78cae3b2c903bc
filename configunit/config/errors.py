"""Configuration error types."""


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when unit options have the wrong shape or type."""

    pass
