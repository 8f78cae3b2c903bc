"""
Output adapters for the OutputPort.

Adapters are looked up by name through a small registry so the CLI and
configuration can pick a sink with a plain string.
"""

import logging

from rich.console import Console

from ...ports.output_port import OutputPort

logger = logging.getLogger(__name__)


class ConsoleOutputAdapter:
    """Write lines to the terminal through a Rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def write_line(self, text: str) -> None:
        # Raw value only: no markup parsing, no highlighting.
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)


class LoggingOutputAdapter:
    """Emit each line as a single log record."""

    def __init__(
        self, logger: logging.Logger | None = None, level: int = logging.INFO
    ) -> None:
        self.logger = logger or logging.getLogger("configunit.output")
        self.level = level

    def write_line(self, text: str) -> None:
        self.logger.log(self.level, "%s", text)


class NullOutputAdapter:
    """Discard all output."""

    def write_line(self, text: str) -> None:
        pass


class MemoryOutputAdapter:
    """Keep written lines in memory."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def write_line(self, text: str) -> None:
        self.lines.append(text)

    def clear(self) -> None:
        self.lines.clear()


class OutputAdapterRegistry:
    """Registry for output adapter implementations."""

    def __init__(self) -> None:
        self._adapters: dict[str, type[OutputPort]] = {}
        self._register_builtin_adapters()

    def _register_builtin_adapters(self) -> None:
        """Register built-in output adapters."""
        self.register("console", ConsoleOutputAdapter)
        self.register("logging", LoggingOutputAdapter)
        self.register("null", NullOutputAdapter)
        self.register("memory", MemoryOutputAdapter)

    def register(self, name: str, adapter_class: type[OutputPort]) -> None:
        """
        Register an output adapter implementation.

        Args:
            name: Name/identifier for the adapter
            adapter_class: Adapter class implementing OutputPort
        """
        self._adapters[name.lower()] = adapter_class

    def get_adapter_class(self, name: str) -> type[OutputPort]:
        """
        Get adapter class by name.

        Raises:
            ValueError: If adapter name is not registered
        """
        adapter_class = self._adapters.get(name.lower())
        if not adapter_class:
            available = sorted(self._adapters)
            raise ValueError(f"Unknown output adapter '{name}'. Available: {available}")
        return adapter_class

    def list_adapters(self) -> dict[str, type[OutputPort]]:
        """Get all registered adapters."""
        return self._adapters.copy()


# Global registry instance
_output_registry = OutputAdapterRegistry()


def create_output_adapter(name: str) -> OutputPort:
    """Create an output adapter by registered name."""
    adapter = _output_registry.get_adapter_class(name)()
    logger.debug(f"Created output adapter '{name}'")
    return adapter


def register_output_adapter(name: str, adapter_class: type[OutputPort]) -> None:
    """Register a custom output adapter."""
    _output_registry.register(name, adapter_class)


def get_available_outputs() -> dict[str, type[OutputPort]]:
    """Get all available output adapters."""
    return _output_registry.list_adapters()
