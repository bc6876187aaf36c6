"""
Robo Common Module

Shared configuration, logging and error types for capture, routing and
distribution.
"""

from .config import RoboConfig, load_config, save_config
from .errors import (
    RoboError,
    HardwareSessionError,
    CaptureStateError,
    CaptureUnsupportedError,
    RoutingError,
    HitServiceError,
)
from .logging_setup import setup_logging

__all__ = [
    "RoboConfig",
    "load_config",
    "save_config",
    "RoboError",
    "HardwareSessionError",
    "CaptureStateError",
    "CaptureUnsupportedError",
    "RoutingError",
    "HitServiceError",
    "setup_logging",
]
