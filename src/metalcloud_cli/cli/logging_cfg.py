"""Logging setup for the command-line entry point.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
single stderr handler is attached here, once, to the package logger.
"""

from __future__ import annotations

import logging

PACKAGE_LOGGER = "metalcloud_cli"

_STD_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def _build_handler() -> logging.Handler:
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_STD_FORMAT))
        return handler

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    return handler


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach the stderr handler and set the level.

    Calling this more than once only adjusts the level.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False

    has_handler = any(getattr(h, "_metalcloud_cli", False) for h in logger.handlers)
    if not has_handler:
        handler = _build_handler()
        handler._metalcloud_cli = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
