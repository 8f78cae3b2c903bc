"""
Demo Use Case - drive a ConfigurableUnit the way a calling script would.

Builds one unit, increments its counter, writes the primary value to the
output sink, then awaits the deferred fetch and writes its value too.
"""

from __future__ import annotations

import logging
from typing import Any

from ..adapters.io.output import ConsoleOutputAdapter
from ..config.errors import ConfigurationError
from ..config.models import DEMO_UNIT_OPTIONS
from ..domain.unit import ConfigurableUnit
from ..ports.output_port import OutputPort

logger = logging.getLogger(__name__)


class DemoUseCaseError(Exception):
    """Exception for Demo Use Case specific errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class DemoUseCase:
    """Use case reproducing the example caller of a ConfigurableUnit."""

    def __init__(
        self,
        output: OutputPort | None = None,
        config: dict[str, Any] | None = None,
    ):
        """
        Initialize the Demo Use Case.

        Args:
            output: Sink for every line the demo writes (console if None)
            config: Optional overrides for ``unit_options`` and ``increment_by``
        """
        self._output = output or ConsoleOutputAdapter()

        self._config = {
            "unit_options": dict(DEMO_UNIT_OPTIONS),
            "increment_by": 10,
            **(config or {}),
        }

    async def run(self) -> dict[str, Any]:
        """
        Execute the demo flow.

        Returns:
            Dictionary with ``primary``, ``param2``, ``param2_squared`` and ``fetched``

        Raises:
            DemoUseCaseError: If the unit cannot be constructed
        """
        try:
            unit = ConfigurableUnit.create(
                self._config["unit_options"], output=self._output
            )
        except ConfigurationError as e:
            raise DemoUseCaseError(f"Could not create unit: {e}", cause=e) from e

        unit.increment(self._config["increment_by"])

        primary = unit.read_primary()
        self._output.write_line(primary)

        fetched = await unit.fetch_deferred()
        self._output.write_line(str(fetched))

        logger.info(
            f"Demo finished: param2={unit.param2}, param2_squared={unit.param2_squared}"
        )

        return {
            "primary": primary,
            "param2": unit.param2,
            "param2_squared": unit.param2_squared,
            "fetched": fetched,
        }
