"""
Capture Session Coordinator

Owns one native capture session from start to teardown and reports its
outcome exactly once.

Lifecycle:
    IDLE --start--> RUNNING --request_stop--> STOP_REQUESTED --poll--> STOPPED
    RUNNING --result_ready(error)--> STOPPED
    any --dismantle--> TORN_DOWN (terminal)

Completion:
- session_ended from the backend is advisory and never forwarded
- result_ready drives completion: on_complete(artifact, heading) on success,
  on_error(HardwareSessionError) on failure, never both, never twice
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

from ..common.config import CaptureConfig
from ..common.errors import CaptureStateError, CaptureUnsupportedError, HardwareSessionError
from ..common.schemas.capture import CapturedArtifact
from .base import CaptureBackend, HeadingProvider
from .capabilities import CaptureCapabilities, CapabilityProvider
from .dispatch import SerialDispatcher
from .heading import HeadingTracker
from .listeners import SessionEventListener, ReviewPresentationListener

logger = logging.getLogger("robo.capture.session")


class SessionState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOP_REQUESTED = "stop_requested"
    STOPPED = "stopped"
    TORN_DOWN = "torn_down"


CompleteCallback = Callable[[CapturedArtifact, Optional[float]], None]
ErrorCallback = Callable[[HardwareSessionError], None]


class CaptureSessionCoordinator:
    """
    Coordinates a hardware capture session with heading sampling.

    All backend and heading events are delivered through one SerialDispatcher,
    so reading the latest heading at completion needs no locking. Control
    calls (start, request_stop, poll, dismantle) must be made on that same
    context.

    Usage:
        coordinator = CaptureSessionCoordinator(
            backend=backend,
            capabilities=CapabilityProvider(backend, compass).resolve(),
            on_complete=handle_room,
            on_error=handle_failure,
            heading_tracker=HeadingTracker(compass, dispatcher),
            dispatcher=dispatcher,
        )
        coordinator.start()
        coordinator.request_stop()
        coordinator.poll()        # observes and acknowledges the stop
        coordinator.dismantle()   # always, exactly at teardown
    """

    def __init__(
        self,
        backend: CaptureBackend,
        capabilities: CaptureCapabilities,
        on_complete: CompleteCallback,
        on_error: ErrorCallback,
        heading_tracker: Optional[HeadingTracker] = None,
        dispatcher: Optional[SerialDispatcher] = None,
        run_config: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize coordinator and attach its listeners to the backend.

        Args:
            backend: Native capture session
            capabilities: Resolved device capabilities
            on_complete: Called once with the artifact and latest heading (degrees or None)
            on_error: Called once with the session failure
            heading_tracker: Compass sampler; heading is omitted when None
            dispatcher: Serial context for hardware events
            run_config: Passed through to backend.run()
        """
        self._backend = backend
        self._capabilities = capabilities
        self._on_complete = on_complete
        self._on_error = on_error
        self._heading = heading_tracker
        self._dispatcher = dispatcher or SerialDispatcher()
        self._run_config = run_config

        self._state = SessionState.IDLE
        self._stop_pending = False
        self._completed = False

        self.session_listener = SessionEventListener(
            self._dispatcher,
            on_session_ended=self._handle_session_ended,
            on_result_ready=self._handle_result_ready,
        )
        self.review_listener = ReviewPresentationListener()
        self._backend.attach(self.session_listener, self.review_listener)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def stop_pending(self) -> bool:
        """True between request_stop() and the poll() that acknowledges it"""
        return self._stop_pending

    @property
    def is_completed(self) -> bool:
        return self._completed

    # ------------------------------------------------------------------
    # Control path
    # ------------------------------------------------------------------

    def start(self) -> None:
        """
        Run the native session and begin heading sampling when available.

        Raises:
            CaptureStateError: If the session was already started or torn down
            CaptureUnsupportedError: If the device cannot capture
        """
        if self._state is not SessionState.IDLE:
            raise CaptureStateError(f"Cannot start capture session in state {self._state.value}")

        if not self._capabilities.capture_supported:
            raise CaptureUnsupportedError("Capture is not supported on this device")

        self._backend.run(self._run_config)
        self._transition(SessionState.RUNNING)

        if self._heading is not None and self._capabilities.heading_available:
            self._heading.start()

    def request_stop(self) -> None:
        """
        Ask the session to stop.

        Repeated requests before poll() observes them collapse into one.
        """
        if self._state is SessionState.TORN_DOWN:
            logger.warning("Stop requested after teardown, ignoring")
            return

        if self._state not in (SessionState.RUNNING, SessionState.STOP_REQUESTED):
            logger.debug("Stop requested in state %s, ignoring", self._state.value)
            return

        self._stop_pending = True
        self._transition(SessionState.STOP_REQUESTED)

    def poll(self) -> bool:
        """
        Observe a pending stop request and act on it.

        The request is cleared here, by the reader, so a later request_stop()
        is never lost to a stale clear.

        Returns:
            True if a pending stop was consumed
        """
        if not self._stop_pending:
            return False

        self._stop_pending = False
        if self._state is not SessionState.STOP_REQUESTED:
            return False

        self._backend.stop()
        self._transition(SessionState.STOPPED)
        return True

    def dismantle(self) -> None:
        """
        Release the native session and the compass.

        Stops both unconditionally, whatever the current state. Calling it
        again after teardown does nothing.
        """
        if self._state is SessionState.TORN_DOWN:
            return

        self._transition(SessionState.TORN_DOWN)
        self._stop_pending = False
        try:
            self._backend.stop()
        finally:
            if self._heading is not None:
                self._heading.stop()

    # ------------------------------------------------------------------
    # Backend events (serial context)
    # ------------------------------------------------------------------

    def _handle_session_ended(self, error: Optional[BaseException]) -> None:
        if error is not None:
            logger.info("Capture session ended with error: %s", error)
        else:
            logger.debug("Capture session ended")

    def _handle_result_ready(self, payload: Any, error: Optional[BaseException]) -> None:
        if self._state is SessionState.TORN_DOWN:
            logger.warning("Capture result arrived after teardown, dropping")
            return

        if self._state is SessionState.IDLE:
            logger.warning("Capture result arrived before start, dropping")
            return

        if self._completed:
            logger.warning("Capture already completed, dropping duplicate result")
            return

        self._completed = True
        self._transition(SessionState.STOPPED)

        if error is None and payload is None:
            error = HardwareSessionError("Capture finished without a result")

        if error is not None:
            if not isinstance(error, HardwareSessionError):
                error = HardwareSessionError(f"Capture session failed: {error}", cause=error)
            logger.error("%s", error)
            self._on_error(error)
            return

        heading = self._heading.latest if self._heading is not None else None
        artifact = CapturedArtifact(payload=payload, heading=heading)
        logger.info(
            "Capture completed (heading: %s)",
            f"{heading.degrees:.1f}" if heading else "none",
        )
        self._on_complete(artifact, artifact.heading_degrees)

    def _transition(self, state: SessionState) -> None:
        if state is not self._state:
            logger.debug("Capture session %s -> %s", self._state.value, state.value)
            self._state = state


def build_capture_session(
    backend: CaptureBackend,
    on_complete: CompleteCallback,
    on_error: ErrorCallback,
    heading_provider: Optional[HeadingProvider] = None,
    config: Optional[CaptureConfig] = None,
    dispatcher: Optional[SerialDispatcher] = None,
) -> CaptureSessionCoordinator:
    """
    Wire a coordinator with its capabilities, dispatcher and heading tracker.

    Args:
        backend: Native capture session
        on_complete: Success callback
        on_error: Failure callback
        heading_provider: Device compass, if any
        config: Capture config (heading can be disabled here)
        dispatcher: Serial context; inline when omitted

    Returns:
        CaptureSessionCoordinator in the IDLE state
    """
    dispatcher = dispatcher or SerialDispatcher()
    capabilities = CapabilityProvider(backend, heading_provider, config).resolve()

    heading_tracker = None
    if heading_provider is not None:
        heading_tracker = HeadingTracker(heading_provider, dispatcher)

    return CaptureSessionCoordinator(
        backend=backend,
        capabilities=capabilities,
        on_complete=on_complete,
        on_error=on_error,
        heading_tracker=heading_tracker,
        dispatcher=dispatcher,
    )
