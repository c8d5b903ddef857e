"""
Process exit handlers for interactive runs.

Ctrl+C (SIGINT) and SIGTERM leave the wizard with a short message and
exit code 0: stopping the wizard is a user choice, not a failure.
Handlers are installed once per process; a second call is a no-op and
registration replaces any previous handler rather than chaining to it.
"""

from __future__ import annotations

import logging
import signal
import sys

import click

logger = logging.getLogger(__name__)

_installed = False


def _handle_exit(signum: int, _frame: object) -> None:
    logger.debug("Received signal %d", signum)
    click.echo()
    click.secho("Exiting Rollbar wizard...", fg="yellow")
    sys.exit(0)


def install_exit_handlers() -> bool:
    """Install SIGINT/SIGTERM handlers.

    Returns:
        True if the handlers were installed by this call, False if they
        already were.
    """
    global _installed
    if _installed:
        return False
    signal.signal(signal.SIGINT, _handle_exit)
    signal.signal(signal.SIGTERM, _handle_exit)
    _installed = True
    return True


def reset_exit_handlers() -> None:
    """Restore default handlers and allow re-installation."""
    global _installed
    signal.signal(signal.SIGINT, signal.default_int_handler)
    signal.signal(signal.SIGTERM, signal.SIG_DFL)
    _installed = False
