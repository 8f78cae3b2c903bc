#!/usr/bin/env python3
"""
Using a ConfigurableUnit from a script.

Run with: python examples/basic_usage.py
"""

import asyncio

from configunit import ConfigurableUnit


async def main() -> None:
    # Options not supplied here take the unit's defaults (param3=100).
    unit = ConfigurableUnit.create({"param1": "hello", "param2": 10})

    unit.increment(10)

    print(unit.read_primary())

    # fetch_deferred is a coroutine; its value is only available once awaited.
    print(await unit.fetch_deferred())


if __name__ == "__main__":
    asyncio.run(main())
