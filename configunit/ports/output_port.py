"""
Output Port interface definition.

This module defines the sink a ConfigurableUnit writes its primary value
to, so the unit never talks to stdout directly.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class OutputPort(Protocol):
    """
    Interface for line-oriented output.

    Implementations receive one undecorated line per call.
    """

    def write_line(self, text: str) -> None:
        """
        Emit a single line of output.

        Args:
            text: The raw text to emit, without a trailing newline
        """
        ...
