"""Pydantic models for configunit configuration."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidConfigurationError

DEFAULT_OPTIONS: Mapping[str, Any] = MappingProxyType(
    {
        "param1": "hello",
        "param2": 0,
        "param3": 100,
    }
)

# Options the demo caller constructs its unit with.
DEMO_UNIT_OPTIONS: Mapping[str, Any] = MappingProxyType({"param1": "hello", "param2": 10})


class UnitOptions(BaseModel):
    """Options accepted by a ConfigurableUnit."""

    param1: str = Field(
        default=DEFAULT_OPTIONS["param1"], description="Primary string value"
    )
    param2: int | float = Field(
        default=DEFAULT_OPTIONS["param2"],
        description="Counter value, mutable after construction",
    )
    param3: int | float = Field(
        default=DEFAULT_OPTIONS["param3"], description="Secondary numeric value"
    )

    @field_validator("param1", mode="before")
    @classmethod
    def stringify_scalar(cls, v: Any) -> Any:
        """Accept numbers and booleans as their text, e.g. env values like 2024."""
        if isinstance(v, bool):
            return str(v).lower()
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @field_validator("param2", "param3", mode="before")
    @classmethod
    def reject_bool(cls, v: Any) -> Any:
        """Reject booleans, which would otherwise pass as ints."""
        if isinstance(v, bool):
            raise ValueError("must be a number, not a boolean")
        return v

    model_config = ConfigDict(validate_assignment=True, extra="ignore")


class AppConfig(BaseModel):
    """Configuration for the demo application and CLI."""

    unit: UnitOptions = Field(
        default_factory=lambda: UnitOptions(**DEMO_UNIT_OPTIONS),
        description="Options used to construct the demo unit",
    )
    increment_by: int | float = Field(
        default=10, description="Amount added to param2 by the demo run"
    )
    output: Literal["console", "logging", "null"] = Field(
        default="console", description="Where log_primary output is written"
    )
    log_level: str = Field(default="INFO", description="Root log level")

    @field_validator("unit", mode="before")
    @classmethod
    def merge_unit_over_demo_defaults(cls, v: Any) -> Any:
        """A partial ``unit`` section only replaces the keys it names."""
        if isinstance(v, Mapping):
            return {**DEMO_UNIT_OPTIONS, **{k: x for k, x in v.items() if x is not None}}
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {v}")
        return level

    def get_nested_value(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation (e.g., 'unit.param1')."""
        value = self.model_dump()

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    model_config = ConfigDict(validate_assignment=True, extra="forbid")


def merge_options(overrides: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Shallow-merge caller overrides over a copy of DEFAULT_OPTIONS.

    ``None`` values count as absent and keep the default.
    """
    merged = dict(DEFAULT_OPTIONS)
    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value
    return merged


def resolve_options(
    overrides: Mapping[str, Any] | UnitOptions | None = None,
) -> UnitOptions:
    """Merge overrides with the defaults and validate the result.

    Raises:
        InvalidConfigurationError: If a recognized option has the wrong type
    """
    if isinstance(overrides, UnitOptions):
        return overrides.model_copy()

    try:
        return UnitOptions(**merge_options(overrides))
    except ValidationError as e:
        raise InvalidConfigurationError(f"Invalid unit options: {e}") from e
