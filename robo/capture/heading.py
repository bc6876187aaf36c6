"""
Heading Tracker

Keeps the latest valid compass heading while a capture is running.
"""

import logging
from typing import Optional

from ..common.schemas.capture import HeadingSample
from .base import HeadingProvider
from .dispatch import SerialDispatcher
from .listeners import HeadingUpdateListener

logger = logging.getLogger("robo.capture.heading")


class HeadingTracker:
    """
    Samples device heading and exposes the latest valid sample.

    Updates with negative accuracy mean the compass is uncalibrated and are
    ignored. Valid updates overwrite each other; there is no smoothing.
    """

    def __init__(self, provider: HeadingProvider, dispatcher: Optional[SerialDispatcher] = None):
        """
        Initialize heading tracker.

        Args:
            provider: Device compass
            dispatcher: Serial context shared with the capture session
        """
        self._provider = provider
        self._latest: Optional[HeadingSample] = None
        self._running = False
        self.listener = HeadingUpdateListener(dispatcher or SerialDispatcher(), self.update)

    @property
    def latest(self) -> Optional[HeadingSample]:
        return self._latest

    @property
    def latest_degrees(self) -> Optional[float]:
        return self._latest.degrees if self._latest else None

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> bool:
        """
        Begin heading updates if the device has a compass.

        Returns:
            True if updates were started
        """
        if not self._provider.is_available():
            logger.info("Heading not available on this device")
            return False

        self._provider.start_updates(self.listener)
        self._running = True
        logger.debug("Heading updates started")
        return True

    def stop(self) -> None:
        """Stop heading updates. Safe to call in any state."""
        self._provider.stop_updates()
        if self._running:
            logger.debug("Heading updates stopped")
        self._running = False

    def update(self, degrees: float, accuracy: float) -> None:
        """Provider callback; only non-negative accuracy is accepted."""
        if accuracy < 0:
            return
        self._latest = HeadingSample(degrees=degrees, accuracy=accuracy)
