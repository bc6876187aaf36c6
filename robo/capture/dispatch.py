"""
Serial Dispatcher

Funnels hardware callbacks onto one execution context so session events and
heading updates are totally ordered relative to each other.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger("robo.capture.dispatch")


class SerialDispatcher:
    """
    Runs callbacks in submission order on a single context.

    With an event loop, callbacks are queued with ``call_soon_threadsafe``
    and run on the loop's thread in FIFO order, whichever thread the
    hardware delivered them from. Without a loop they run inline on the
    caller, which must then be the only thread delivering events.

    Usage:
        dispatcher = SerialDispatcher.for_running_loop()
        dispatcher.dispatch(tracker.update, 271.5, 10.0)
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @classmethod
    def for_running_loop(cls) -> "SerialDispatcher":
        """Bind to the loop running in the current thread."""
        return cls(asyncio.get_running_loop())

    @property
    def loop(self) -> Optional[asyncio.AbstractEventLoop]:
        return self._loop

    @property
    def is_inline(self) -> bool:
        return self._loop is None

    def dispatch(self, callback: Callable[..., Any], *args: Any) -> None:
        if self._loop is None:
            callback(*args)
            return

        if self._loop.is_closed():
            logger.warning("Event loop closed, dropping %s", getattr(callback, "__name__", callback))
            return

        self._loop.call_soon_threadsafe(callback, *args)
