"""
Error types shared across Robo Core.

Hardware and network failures are reported once to the immediate caller.
Nothing in this package retries internally.
"""

from typing import Optional


class RoboError(Exception):
    """Base class for Robo Core errors."""
    pass


class HardwareSessionError(RoboError):
    """A capture session failed at the hardware level."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class CaptureStateError(RoboError):
    """Operation is not valid in the capture session's current state."""
    pass


class CaptureUnsupportedError(RoboError):
    """The device cannot run a capture session."""
    pass


class RoutingError(RoboError):
    """Routing presentation was used out of order."""
    pass


class HitServiceError(RoboError):
    """
    Failure talking to the HIT creation service.

    ``description`` is safe to show to the user as-is.
    """

    def __init__(self, description: str):
        super().__init__(description)
        self.description = description


class InvalidURLError(HitServiceError):
    def __init__(self):
        super().__init__("Invalid server URL. Check your API settings.")


class RequestFailedError(HitServiceError):
    def __init__(self, detail: str):
        super().__init__(f"Connection failed: {detail}")
        self.detail = detail


class HTTPStatusError(HitServiceError):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"Server error ({status_code}): {message}")
        self.status_code = status_code
        self.message = message


class DecodingError(HitServiceError):
    def __init__(self, detail: str = ""):
        super().__init__("Could not read server response. The app may need updating.")
        self.detail = detail
