from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

# Tags the handler installed here so repeated configuration replaces it.
_HANDLER_ATTR = "_duru_handler"


def configure_logging(debug: bool = False, console: Console | None = None) -> logging.Logger:
    """Send log records for the ``duru`` package to stderr through rich.

    Safe to call more than once; the previous handler is replaced.
    """
    logger = logging.getLogger("duru")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_ATTR, False):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=debug,
        show_path=debug,
        markup=False,
        rich_tracebacks=True,
    )
    setattr(handler, _HANDLER_ATTR, True)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
