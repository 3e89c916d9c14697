"""Logging setup with Rich rendering on stderr.

Library modules log through ``logging.getLogger(__name__)`` and never
install handlers themselves. Applications that want readable diagnostics
call :func:`configure_logging` once at startup:

* **stderr only** -- diagnostics never touch stdout.
* **Colour control** -- respects ``NO_COLOR``, ``TERM=dumb``, and the
  ``no_color`` argument.
* **Verbosity** -- ``verbose=True`` lowers the level to ``DEBUG`` so cache
  hits, misses and outgoing requests become visible.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "datamanager"

_handler: Optional[logging.Handler] = None


def _should_disable_color() -> bool:
    """Check if color should be disabled.

    Returns True when NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


def configure_logging(verbose: bool = False, no_color: bool = False) -> logging.Logger:
    """Attach a :class:`~rich.logging.RichHandler` to the package logger.

    Calling this again replaces the previously installed handler, so the
    verbosity can be changed at runtime.

    Args:
        verbose: Emit ``DEBUG`` records instead of ``WARNING`` and above.
        no_color: Disable all colour and Rich markup.

    Returns:
        The configured ``datamanager`` logger.
    """
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)

    console = Console(
        file=sys.stderr,
        stderr=True,
        no_color=no_color or _should_disable_color(),
    )
    _handler = RichHandler(console=console, show_path=verbose, markup=False)
    _handler.setFormatter(logging.Formatter("%(message)s"))

    logger.addHandler(_handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger


def reset_logging() -> None:
    """Remove the handler installed by :func:`configure_logging`.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _handler
    if _handler is not None:
        logging.getLogger(LOGGER_NAME).removeHandler(_handler)
        _handler = None
