"""Global logging configuration with a Rich handler."""

import logging
import threading

from rich.console import Console
from rich.logging import RichHandler


class _LoggingState:
    console: Console | None = None
    handler: RichHandler | None = None
    lock = threading.Lock()


def setup_logging(level: int | str = logging.INFO, console: Console | None = None) -> RichHandler:
    """Install a RichHandler on the root logger.

    Calling again only adjusts the level; the handler is installed once.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    with _LoggingState.lock:
        root_logger = logging.getLogger()

        if _LoggingState.handler is not None:
            root_logger.setLevel(level)
            return _LoggingState.handler

        _LoggingState.console = console or Console(stderr=True)

        # Drop RichHandlers installed by someone else; keep other handlers
        for handler in list(root_logger.handlers):
            if isinstance(handler, RichHandler):
                root_logger.removeHandler(handler)

        rich_handler = RichHandler(
            console=_LoggingState.console,
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        rich_handler.setFormatter(logging.Formatter(fmt="%(message)s"))

        root_logger.addHandler(rich_handler)
        root_logger.setLevel(level)
        _LoggingState.handler = rich_handler
        return rich_handler


def reset_logging() -> None:
    """Remove the handler installed by setup_logging."""
    with _LoggingState.lock:
        if _LoggingState.handler is not None:
            logging.getLogger().removeHandler(_LoggingState.handler)
        _LoggingState.handler = None
        _LoggingState.console = None
