"""
Capture - Hardware Capture Session Coordination

Runs a native capture session, samples heading alongside it and reports one
outcome per session.

Key Components:
- CaptureSessionCoordinator: session lifecycle and exactly-once completion
- HeadingTracker: latest valid compass sample
- SessionEventListener / ReviewPresentationListener / HeadingUpdateListener:
  single-capability hardware listeners
- SerialDispatcher: one ordered context for all hardware callbacks
- CapabilityProvider: device capabilities resolved once at startup
"""

from .base import CaptureBackend, HeadingProvider
from .capabilities import CaptureCapabilities, CapabilityProvider
from .dispatch import SerialDispatcher
from .heading import HeadingTracker
from .listeners import SessionEventListener, ReviewPresentationListener, HeadingUpdateListener
from .session import CaptureSessionCoordinator, SessionState, build_capture_session

__all__ = [
    "CaptureBackend",
    "HeadingProvider",
    "CaptureCapabilities",
    "CapabilityProvider",
    "SerialDispatcher",
    "HeadingTracker",
    "SessionEventListener",
    "ReviewPresentationListener",
    "HeadingUpdateListener",
    "CaptureSessionCoordinator",
    "SessionState",
    "build_capture_session",
]
