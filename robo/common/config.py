"""
Configuration Management for Robo Core

Loads configuration from ~/.robo/config.json and environment variables.
"""

import os
import json
import logging
from pathlib import Path
from dataclasses import dataclass, field

from dotenv import load_dotenv

logger = logging.getLogger("robo.common.config")

# Default config paths
CONFIG_DIR = Path.home() / ".robo"
CONFIG_PATH = CONFIG_DIR / "config.json"
LOGS_DIR = CONFIG_DIR / "logs"

DEFAULT_API_BASE_URL = "https://robo.app"


@dataclass
class APIConfig:
    """Robo API configuration"""
    base_url: str = DEFAULT_API_BASE_URL
    device_id: str = ""
    timeout: float = 30.0


@dataclass
class CaptureConfig:
    """Capture session configuration"""
    heading_enabled: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"


@dataclass
class RoboConfig:
    """Main Robo configuration"""
    api: APIConfig = field(default_factory=APIConfig)
    capture: CaptureConfig = field(default_factory=CaptureConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _parse_api_config(data: dict) -> APIConfig:
    """Parse api section from config dict"""
    api_data = data.get("api", {})
    return APIConfig(
        base_url=api_data.get("base_url") or api_data.get("url", DEFAULT_API_BASE_URL),
        device_id=api_data.get("device_id", ""),
        timeout=float(api_data.get("timeout", 30.0)),
    )


def _parse_capture_config(data: dict) -> CaptureConfig:
    """Parse capture section from config dict"""
    capture_data = data.get("capture", {})
    return CaptureConfig(
        heading_enabled=_parse_bool(capture_data.get("heading_enabled", True)),
    )


def _parse_logging_config(data: dict) -> LoggingConfig:
    """Parse logging section from config dict"""
    logging_data = data.get("logging", {})
    return LoggingConfig(
        level=str(logging_data.get("level", "INFO")).upper(),
    )


def load_config() -> RoboConfig:
    """
    Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (~/.robo/config.json)
    3. Default values
    """
    config = RoboConfig()

    # .env never overrides variables already set in the environment
    load_dotenv()

    if CONFIG_PATH.exists():
        try:
            with open(CONFIG_PATH) as f:
                data = json.load(f)

            config.api = _parse_api_config(data)
            config.capture = _parse_capture_config(data)
            config.logging = _parse_logging_config(data)
        except (json.JSONDecodeError, IOError, ValueError) as e:
            logger.warning("Failed to load config file: %s", e)

    # Environment variable overrides
    if os.getenv("ROBO_API_BASE_URL"):
        config.api.base_url = os.getenv("ROBO_API_BASE_URL")
    if os.getenv("ROBO_DEVICE_ID"):
        config.api.device_id = os.getenv("ROBO_DEVICE_ID")
    if os.getenv("ROBO_API_TIMEOUT"):
        try:
            config.api.timeout = float(os.getenv("ROBO_API_TIMEOUT"))
        except ValueError:
            logger.warning(
                "Ignoring invalid ROBO_API_TIMEOUT %r, keeping %.1fs",
                os.getenv("ROBO_API_TIMEOUT"),
                config.api.timeout,
            )

    if os.getenv("ROBO_HEADING_ENABLED"):
        config.capture.heading_enabled = _parse_bool(os.getenv("ROBO_HEADING_ENABLED"))

    if os.getenv("ROBO_LOG_LEVEL"):
        config.logging.level = os.getenv("ROBO_LOG_LEVEL").upper()

    return config


def save_config(config: RoboConfig) -> None:
    """Save configuration to file."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)

    data = {
        "api": {
            "base_url": config.api.base_url,
            "device_id": config.api.device_id,
            "timeout": config.api.timeout,
        },
        "capture": {
            "heading_enabled": config.capture.heading_enabled,
        },
        "logging": {
            "level": config.logging.level,
        },
    }

    with open(CONFIG_PATH, "w") as f:
        json.dump(data, f, indent=2)

    # Device id is an auth header value
    CONFIG_PATH.chmod(0o600)


def ensure_directories() -> None:
    """Ensure required directories exist"""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    LOGS_DIR.mkdir(parents=True, exist_ok=True)
