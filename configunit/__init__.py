"""ConfigurableUnit - a small option-driven unit with an async fetch."""

from .domain.unit import ConfigurableUnit

__version__ = "0.1.0"

__all__ = ["ConfigurableUnit", "__version__"]
