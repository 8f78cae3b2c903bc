"""
IO adapters for output and logging.

This module provides the OutputPort implementations and the global
logging setup used by the CLI.
"""

from .logging_setup import reset_logging, setup_logging
from .output import (
    ConsoleOutputAdapter,
    LoggingOutputAdapter,
    MemoryOutputAdapter,
    NullOutputAdapter,
    create_output_adapter,
    get_available_outputs,
    register_output_adapter,
)

__all__ = [
    "ConsoleOutputAdapter",
    "LoggingOutputAdapter",
    "MemoryOutputAdapter",
    "NullOutputAdapter",
    "create_output_adapter",
    "get_available_outputs",
    "register_output_adapter",
    "setup_logging",
    "reset_logging",
]
