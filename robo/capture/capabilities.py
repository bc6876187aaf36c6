"""
Capture Capabilities

Device capabilities are resolved once at startup and injected into the
session coordinator. There is no process-wide default; tests pass their own.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..common.config import CaptureConfig
from .base import CaptureBackend, HeadingProvider

logger = logging.getLogger("robo.capture.capabilities")


@dataclass(frozen=True)
class CaptureCapabilities:
    """What this device can do for a capture session"""
    capture_supported: bool = True
    heading_available: bool = False


class CapabilityProvider:
    """
    Resolves CaptureCapabilities from the device boundaries.

    The first call to resolve() probes the backend and heading provider;
    later calls return the same result.
    """

    def __init__(
        self,
        backend: CaptureBackend,
        heading_provider: Optional[HeadingProvider] = None,
        config: Optional[CaptureConfig] = None,
    ):
        self._backend = backend
        self._heading_provider = heading_provider
        self._config = config or CaptureConfig()
        self._resolved: Optional[CaptureCapabilities] = None

    def resolve(self) -> CaptureCapabilities:
        if self._resolved is None:
            heading_available = (
                self._config.heading_enabled
                and self._heading_provider is not None
                and self._heading_provider.is_available()
            )
            self._resolved = CaptureCapabilities(
                capture_supported=self._backend.is_supported(),
                heading_available=heading_available,
            )
            logger.info(
                "Capture capabilities: capture=%s heading=%s",
                self._resolved.capture_supported,
                self._resolved.heading_available,
            )
        return self._resolved
