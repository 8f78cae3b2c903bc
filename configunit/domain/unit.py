"""
ConfigurableUnit - an option-driven unit with instance-scoped state.

A unit is built from caller overrides merged over built-in defaults:

```python
unit = ConfigurableUnit.create({"param1": "hello", "param2": 10})
unit.increment(10)
unit.read_primary()            # "hello"
value = await unit.fetch_deferred()   # 1
```

Each instance owns its own field values. ``param2_squared`` is derived
once at construction and is not refreshed by ``increment``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from ..adapters.io.output import ConsoleOutputAdapter
from ..config.models import UnitOptions, resolve_options
from ..ports.output_port import OutputPort

logger = logging.getLogger(__name__)

FETCH_RESULT = 1


class ConfigurableUnit:
    """
    Holds three option values and a derived square of ``param2``.

    Attributes:
        param1: String option, default ``"hello"``
        param2: Numeric option, default ``0``; changed by ``increment``
        param3: Numeric option, default ``100``
        param2_squared: ``param2 * param2`` as of construction time
    """

    def __init__(
        self,
        options: Mapping[str, Any] | UnitOptions | None = None,
        output: OutputPort | None = None,
    ) -> None:
        """
        Initialize the unit from caller options.

        Args:
            options: Overrides for any of param1, param2, param3. Missing
                or ``None`` values fall back to the defaults; unknown keys
                are ignored.
            output: Sink for ``log_primary``. Defaults to the console.

        Raises:
            InvalidConfigurationError: If a recognized option has the wrong type
        """
        resolved = resolve_options(options)

        self.param1: str = resolved.param1
        self.param2: int | float = resolved.param2
        self.param3: int | float = resolved.param3

        # Derived once; increment() leaves it stale on purpose.
        self.param2_squared: int | float = resolved.param2 * resolved.param2

        self._output: OutputPort = output or ConsoleOutputAdapter()

        logger.debug(f"Created {self!r}")

    @classmethod
    def create(
        cls,
        options: Mapping[str, Any] | UnitOptions | None = None,
        output: OutputPort | None = None,
    ) -> ConfigurableUnit:
        """Construct a unit; same as calling the class."""
        return cls(options, output=output)

    @property
    def output(self) -> OutputPort:
        return self._output

    @property
    def options(self) -> UnitOptions:
        """Snapshot of the current option values."""
        return UnitOptions(param1=self.param1, param2=self.param2, param3=self.param3)

    def log_primary(self) -> None:
        """Write ``param1`` to the output sink as one undecorated line."""
        self._output.write_line(str(self.param1))

    def increment(self, amount: int | float) -> None:
        """
        Add ``amount`` to ``param2``.

        Any amount is accepted, including zero and negatives.
        ``param2_squared`` is not recomputed.
        """
        self.param2 += amount
        logger.debug(f"param2 incremented by {amount} to {self.param2}")

    def read_primary(self) -> str:
        return self.param1

    async def fetch_deferred(self) -> int:
        """
        Resolve to ``1`` after yielding to the event loop once.

        Never raises. The value only becomes available after the caller's
        current synchronous step, never inline.
        """
        await asyncio.sleep(0)
        logger.debug(f"fetch_deferred resolved to {FETCH_RESULT}")
        return FETCH_RESULT

    def start_fetch(self) -> asyncio.Task[int]:
        """
        Schedule ``fetch_deferred`` on the running loop.

        Returns:
            A task that is not yet done; await it for the value.

        Raises:
            RuntimeError: If no event loop is running
        """
        return asyncio.get_running_loop().create_task(self.fetch_deferred())

    # Template-style method names.
    method_name = log_primary
    add_something = increment
    get_something = read_primary
    fetch_some_data = fetch_deferred

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(param1={self.param1!r}, param2={self.param2!r}, "
            f"param3={self.param3!r}, param2_squared={self.param2_squared!r})"
        )
