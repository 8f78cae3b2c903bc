"""Domain objects for configunit."""

from .unit import ConfigurableUnit

__all__ = ["ConfigurableUnit"]
