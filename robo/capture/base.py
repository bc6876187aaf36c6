"""
Hardware Boundaries

Abstract interfaces for the native capture session and the heading sensor.
Platform bindings implement these; tests substitute fakes.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .listeners import (
        SessionEventListener,
        ReviewPresentationListener,
        HeadingUpdateListener,
    )


class CaptureBackend(ABC):
    """
    Native capture session.

    The backend reports two events to the session listener:
    - session_ended(error): advisory, the scan stopped
    - result_ready(payload, error): the processed result, drives completion

    Before showing its own review screen it asks the review listener.
    """

    @abstractmethod
    def attach(
        self,
        session_listener: "SessionEventListener",
        review_listener: "ReviewPresentationListener",
    ) -> None:
        """Register the listeners that receive session events."""
        pass

    @abstractmethod
    def run(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Start the native session."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """
        Stop the native session.

        Must be safe to call when the session is not running.
        """
        pass

    def is_supported(self) -> bool:
        """Whether this device can run the session at all."""
        return True


class HeadingProvider(ABC):
    """Device compass delivering (degrees, accuracy) updates."""

    @abstractmethod
    def is_available(self) -> bool:
        pass

    @abstractmethod
    def start_updates(self, listener: "HeadingUpdateListener") -> None:
        pass

    @abstractmethod
    def stop_updates(self) -> None:
        """Must be safe to call when updates were never started."""
        pass
