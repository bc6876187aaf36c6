"""
Capture Listeners

One listener per hardware capability. The session coordinator composes them
instead of implementing every delegate interface itself:

- SessionEventListener: native session lifecycle events
- ReviewPresentationListener: the hardware's built-in review prompt
- HeadingUpdateListener: compass updates

Event-carrying listeners hop onto the shared SerialDispatcher before
touching any state.
"""

import logging
from typing import Any, Callable, Optional

from .dispatch import SerialDispatcher

logger = logging.getLogger("robo.capture.listeners")


class SessionEventListener:
    """Receives session_ended / result_ready from the capture backend."""

    def __init__(
        self,
        dispatcher: SerialDispatcher,
        on_session_ended: Callable[[Optional[BaseException]], None],
        on_result_ready: Callable[[Any, Optional[BaseException]], None],
    ):
        self._dispatcher = dispatcher
        self._on_session_ended = on_session_ended
        self._on_result_ready = on_result_ready

    def session_ended(self, error: Optional[BaseException] = None) -> None:
        self._dispatcher.dispatch(self._on_session_ended, error)

    def result_ready(self, payload: Any = None, error: Optional[BaseException] = None) -> None:
        self._dispatcher.dispatch(self._on_result_ready, payload, error)


class ReviewPresentationListener:
    """Answers the backend's "show the review screen?" prompt."""

    def should_present(self, data: Any = None, error: Optional[BaseException] = None) -> bool:
        # Always let the hardware show its review screen; the processed
        # result only arrives through result_ready after that screen.
        if error is not None:
            logger.debug("Review prompt carried error: %s", error)
        return True


class HeadingUpdateListener:
    """Forwards compass updates to a handler on the serial context."""

    def __init__(
        self,
        dispatcher: SerialDispatcher,
        on_heading: Callable[[float, float], None],
    ):
        self._dispatcher = dispatcher
        self._on_heading = on_heading

    def heading_updated(self, degrees: float, accuracy: float) -> None:
        self._dispatcher.dispatch(self._on_heading, degrees, accuracy)
