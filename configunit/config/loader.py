"""Configuration loader for configunit."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import ConfigurationError
from .models import AppConfig

logger = logging.getLogger(__name__)

__all__ = ["ConfigLoader", "ConfigurationError", "load_config"]


class ConfigLoader:
    """Configuration loader that merges config files, environment variables, and CLI arguments."""

    DEFAULT_CONFIG_FILES = [
        ".configunit.toml",  # TOML files (preferred)
        ".configunit.yml",
        ".configunit.yaml",
        "configunit.toml",
        "configunit.yml",
        "configunit.yaml",
    ]

    ENV_PREFIX = "CONFIGUNIT_"

    def __init__(self, config_file: str | Path | None = None):
        """Initialize the configuration loader.

        Args:
            config_file: Path to configuration file. If None, will search for default files.
        """
        self.config_file = Path(config_file) if config_file else None
        self._config_cache: AppConfig | None = None

    def load_config(
        self,
        env_overrides: dict[str, Any] | None = None,
        cli_overrides: dict[str, Any] | None = None,
        reload: bool = False,
    ) -> AppConfig:
        """Load configuration from all sources.

        Args:
            env_overrides: Environment variable overrides
            cli_overrides: CLI argument overrides
            reload: Force reload even if cached

        Returns:
            Validated application configuration

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self._config_cache is not None and not reload:
            return self._config_cache

        try:
            config_dict: dict[str, Any] = {}

            # 1. Configuration file (TOML or YAML)
            file_config = self._load_config_file()
            if file_config:
                config_dict = self._deep_merge(config_dict, file_config)
                logger.debug(
                    f"Loaded configuration from {self._get_config_file_path()}"
                )

            # 2. Environment variables
            env_config = env_overrides or self._load_env_config()
            if env_config:
                config_dict = self._deep_merge(config_dict, env_config)
                logger.debug("Applied environment variable overrides")

            # 3. CLI overrides (highest priority)
            if cli_overrides:
                config_dict = self._deep_merge(config_dict, cli_overrides)
                logger.debug("Applied CLI argument overrides")

            self._config_cache = AppConfig(**config_dict)
            logger.debug("Configuration loaded and validated successfully")

            return self._config_cache

        except ValidationError as e:
            error_msg = f"Configuration validation failed: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_config_file(self) -> dict[str, Any] | None:
        """Load configuration from TOML or YAML file."""
        config_file = self._get_config_file_path()

        if not config_file or not config_file.exists():
            logger.debug("No configuration file found, using defaults")
            return None

        try:
            if config_file.suffix.lower() == ".toml":
                return self._load_toml_file(config_file)
            elif config_file.suffix.lower() in (".yml", ".yaml"):
                return self._load_yaml_file(config_file)
            else:
                logger.warning(f"Unknown configuration file type: {config_file}")
                return None

        except (OSError, UnicodeDecodeError) as e:
            error_msg = f"Failed to read {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_toml_file(self, config_file: Path) -> dict[str, Any] | None:
        """Load configuration from TOML file."""
        try:
            with open(config_file, "rb") as f:
                content = tomllib.load(f)

            if not content:
                logger.warning(f"Configuration file {config_file} is empty")
                return None

            return content

        except tomllib.TOMLDecodeError as e:
            error_msg = f"Invalid TOML in {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_yaml_file(self, config_file: Path) -> dict[str, Any] | None:
        """Load configuration from YAML file."""
        try:
            with open(config_file, encoding="utf-8") as f:
                content = yaml.safe_load(f)

            if not content:
                logger.warning(f"Configuration file {config_file} is empty")
                return None

            if not isinstance(content, dict):
                raise ConfigurationError(
                    f"Configuration file {config_file} must contain a mapping"
                )

            return content

        except yaml.YAMLError as e:
            error_msg = f"Invalid YAML in {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_env_config(self) -> dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: dict[str, Any] = {}

        for key, value in os.environ.items():
            if key.startswith(self.ENV_PREFIX):
                config_key = key[len(self.ENV_PREFIX) :].lower()

                # CONFIGUNIT_UNIT__PARAM2 -> unit.param2
                nested_keys = config_key.split("__")

                self._set_nested_value(
                    env_config, nested_keys, self._parse_env_value(value)
                )

        return env_config

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to appropriate Python type."""
        if value.lower() in ("true", "yes", "on"):
            return True
        elif value.lower() in ("false", "no", "off"):
            return False

        try:
            if "." not in value:
                return int(value)
            else:
                return float(value)
        except ValueError:
            pass

        return value

    def _set_nested_value(
        self, config: dict[str, Any], keys: list[str], value: Any
    ) -> None:
        """Store ``value`` under the key path, creating sections on the way.

        Raises:
            ConfigurationError: If a variable names both a section and a value
        """
        *sections, leaf = keys
        section = config

        for depth, key in enumerate(sections, start=1):
            section = section.setdefault(key, {})
            if not isinstance(section, dict):
                raise ConfigurationError(
                    f"Conflicting environment variables: "
                    f"{self._env_name(keys[:depth])} is set to a value but "
                    f"{self._env_name(keys)} treats it as a section"
                )

        if isinstance(section.get(leaf), dict) and not isinstance(value, dict):
            raise ConfigurationError(
                f"Conflicting environment variables: {self._env_name(keys)} "
                f"is set to a value but also has nested variables"
            )

        section[leaf] = value

    def _env_name(self, keys: list[str]) -> str:
        return self.ENV_PREFIX + "__".join(keys).upper()

    def _get_config_file_path(self) -> Path | None:
        """Return the explicit config file, else the first default file present."""
        if self.config_file:
            return self.config_file

        candidates = (Path(name) for name in self.DEFAULT_CONFIG_FILES)
        return next((path for path in candidates if path.exists()), None)

    def _deep_merge(
        self, base: dict[str, Any], updates: dict[str, Any]
    ) -> dict[str, Any]:
        """Return ``base`` with ``updates`` applied; sections merge key by key."""
        merged = dict(base)

        for key, value in updates.items():
            current = merged.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                value = self._deep_merge(current, value)
            merged[key] = value

        return merged

    def create_sample_config(self, filepath: str | Path | None = None) -> Path:
        """Write a commented YAML sample configuration.

        Args:
            filepath: Path for the config file. Defaults to .configunit.yml

        Returns:
            Path to the created configuration file
        """
        filepath = Path(filepath) if filepath else Path(".configunit.yml")

        config_content = """# configunit configuration
# Every key is optional; missing keys use the built-in defaults.

# Options passed to the unit constructed by `configunit demo`
unit:
  param1: 'hello'   # Primary value, written by log_primary()
  param2: 10        # Counter; param2_squared is derived from it once
  param3: 100       # Secondary numeric value

# Amount added to unit.param2 during the demo run
increment_by: 10

# Output sink for log_primary(): 'console', 'logging' or 'null'
output: 'console'

# Root log level: DEBUG, INFO, WARNING, ERROR, CRITICAL
log_level: 'INFO'

# Environment overrides use the CONFIGUNIT_ prefix and '__' for nesting:
#   CONFIGUNIT_UNIT__PARAM2=42
#   CONFIGUNIT_OUTPUT=logging
"""

        with open(filepath, "w", encoding="utf-8") as f:
            f.write(config_content)

        logger.info(f"Sample YAML configuration created at {filepath}")
        return filepath


def load_config(
    config_file: str | Path | None = None,
    env_overrides: dict[str, Any] | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Load configuration from all sources.

    Args:
        config_file: Path to configuration file
        env_overrides: Environment variable overrides
        cli_overrides: CLI argument overrides

    Returns:
        Validated application configuration
    """
    loader = ConfigLoader(config_file)
    return loader.load_config(env_overrides, cli_overrides)
