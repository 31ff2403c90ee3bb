"""Runs an install session from synchronous Click commands."""

from __future__ import annotations

import asyncio
import logging
import signal
import sys
from typing import Awaitable, Callable, TypeVar

import click

from depot.core.install import InstallConfig, InstallSession
from depot.exceptions import DepotError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Exit status for operational failures; Click uses 2 for usage errors.
EXIT_FAILURE = 1


def _watch_interrupts(cancel_event: asyncio.Event) -> None:
    """Set *cancel_event* on SIGINT so the pipeline stops at the next step."""
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel_event.set)
    except (NotImplementedError, RuntimeError, ValueError):
        logger.debug("Signal handlers unavailable; Ctrl-C interrupts immediately")


def run_session(
    config: InstallConfig,
    action: Callable[[InstallSession], Awaitable[T]],
) -> T:
    """Open an :class:`InstallSession`, run *action* in it, and return its result."""

    async def _main() -> T:
        cancel_event = asyncio.Event()
        _watch_interrupts(cancel_event)
        async with InstallSession(config, cancel_event=cancel_event) as session:
            return await action(session)

    return asyncio.run(_main())


def run_or_exit(
    config: InstallConfig,
    action: Callable[[InstallSession], Awaitable[T]],
) -> T:
    """Like :func:`run_session`, but report DepotError on stderr and exit 1."""
    try:
        return run_session(config, action)
    except DepotError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_FAILURE)
