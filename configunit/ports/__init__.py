"""
Port interfaces for configunit.

Interfaces are Python Protocols describing what the domain needs from
the outside world.
"""

from .output_port import OutputPort

__all__ = ["OutputPort"]
