"""
Capture Schemas

Values produced by a capture session and the summary handed to routing.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class SensorType(str, Enum):
    """Sensor that produced a capture"""
    LIDAR = "lidar"
    BARCODE = "barcode"
    CAMERA = "camera"
    PRODUCT_SCAN = "product_scan"
    BEACON = "beacon"
    MOTION = "motion"
    HEALTH = "health"


@dataclass(frozen=True)
class HeadingSample:
    """Magnetic heading in degrees, accepted only with accuracy >= 0"""
    degrees: float
    accuracy: float = 0.0


@dataclass
class CapturedArtifact:
    """
    Result of a finished capture session.

    ``payload`` is the opaque geometry handed back by the hardware; this
    package never inspects it.
    """
    payload: Any
    heading: Optional[HeadingSample] = None
    captured_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def heading_degrees(self) -> Optional[float]:
        return self.heading.degrees if self.heading else None


@dataclass(frozen=True)
class CaptureRouting:
    """Summary of a capture event used to pick destinations"""
    sensor_type: SensorType
    photo_count: int = 0
